"""
Default labels for the label types used by sites and bonds.
"""

from typing import Any, Dict, Optional

from .exceptions import LabelTypeError


DEFAULT_LABELS: Dict[type, Any] = {
    int: 1,
    float: 1.0,
    complex: 1 + 0j,
    str: "1",
    bool: True,
}

# Names accepted in configuration files
LABEL_TYPE_NAMES: Dict[str, type] = {
    'int': int,
    'float': float,
    'complex': complex,
    'str': str,
    'bool': bool,
}


def default_label(label_type: type) -> Any:
    """
    Get the default label for a label type.

    Parameters
    ----------
    label_type : type
        Type of the label (e.g. int, str)

    Returns
    -------
    label : Any
        1 for int, 1.0 for float, "1" for str, etc. Other types are
        instantiated without arguments.

    Raises
    ------
    LabelTypeError
        If label_type is not a type or cannot be instantiated without
        arguments.
    """
    if label_type in DEFAULT_LABELS:
        return DEFAULT_LABELS[label_type]

    if not isinstance(label_type, type):
        raise LabelTypeError(f"Label type must be a type, got {label_type!r}")

    try:
        return label_type()
    except TypeError as exc:
        raise LabelTypeError(
            f"No default label for type '{label_type.__name__}': {exc}"
        ) from exc


def check_label_type(label: Any, kind: str, index: int,
                     expected: Optional[type] = None) -> type:
    """
    Check a label against the label type of its container.

    Parameters
    ----------
    label : Any
        Label to check
    kind : str
        'site' or 'bond', used in the error message
    index : int
        Position of the element in its container, used in the error message
    expected : type, optional
        Label type of the container. If None, the type of `label` is
        adopted.

    Returns
    -------
    label_type : type
        The label type of the container
    """
    if expected is None:
        return type(label)
    if not isinstance(label, expected):
        raise LabelTypeError(
            f"{kind} {index} has label of type '{type(label).__name__}', "
            f"expected '{expected.__name__}'"
        )
    return expected
