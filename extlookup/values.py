"""Value kinds returned by a lookup and tabular row shaping."""

from typing import Any, Dict, List, Literal, Optional, Sequence, Union


Value = Union[str, List[Any], Dict[str, Any]]
ValueKind = Literal["scalar", "list", "map", "other"]


def value_kind(value: Any) -> ValueKind:
    """Classify a value as scalar, list, map or other."""
    if isinstance(value, str):
        return "scalar"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "map"
    return "other"


def shape_row(row: Sequence[Any]) -> Optional[Value]:
    """
    Turn a matched tabular row into a value.

    Two cells give the second cell as a scalar; more cells give the
    remaining cells as a list of plain strings. A row holding only the
    key has no value and yields None.

    Args:
        row: Row cells, the first being the key

    Returns:
        Scalar, list, or None
    """
    if len(row) == 2:
        return _cell_text(row[1])
    if len(row) > 2:
        return [_cell_text(cell) for cell in row[1:]]
    return None


def _cell_text(cell: Any) -> str:
    if cell is None:
        return ""
    return str(cell)
