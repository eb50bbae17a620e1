import datetime
import decimal
import uuid
import sanitizable
import sqlalchemy
from .errors import FieldTypeError


def parse_attr(attr_name, column, attr_val):
    """
    Parse the supplied `attr_val` so it can be saved in the SQLAlchemy `column`

    :param attr_name: attribute name, used in the error message
    :param column: SQLAlchemy column
    :param attr_val: JSON value
    :return: processed value
    :raises FieldTypeError: when the value can't be converted to the column type
    """
    if attr_val is None:
        return attr_val

    try:
        python_type = column.type.python_type
    except NotImplementedError as exc:
        # custom column types: the model should know how to handle the value
        sanitizable.log.debug(exc)
        return attr_val

    # skip type coercion on JSON columns, since they could be anything
    if isinstance(column.type, sqlalchemy.types.JSON):
        return attr_val

    if isinstance(attr_val, python_type) and not (python_type is int and isinstance(attr_val, bool)):
        if python_type is datetime.date and isinstance(attr_val, datetime.datetime):
            return attr_val.date()
        return attr_val

    if isinstance(attr_val, (dict, list)):
        raise FieldTypeError(attr_name, attr_val, f"(expected {python_type.__name__})")

    try:
        """
        Parse datetime and date values for some common representations: str(datetime.datetime.now()),
        the JS datepicker format and ISO 8601.
        If another format is used, the model should create a custom column type or override `from_json`
        """
        if python_type is datetime.datetime:
            return datetime.datetime.fromisoformat(str(attr_val))
        if python_type is datetime.date:
            return datetime.date.fromisoformat(str(attr_val)[:10])
        if python_type is datetime.time:
            return datetime.time.fromisoformat(str(attr_val))
        if python_type is bool:
            if attr_val in (0, 1):
                return bool(attr_val)
            raise ValueError("not a boolean")
        if python_type is int and isinstance(attr_val, (bool, float)):
            if isinstance(attr_val, bool) or not attr_val.is_integer():
                raise ValueError("not an integer")
            return int(attr_val)
        if python_type is decimal.Decimal:
            return decimal.Decimal(str(attr_val))
        if python_type is uuid.UUID:
            return uuid.UUID(str(attr_val))
        return python_type(attr_val)
    except (ValueError, TypeError, decimal.InvalidOperation) as exc:
        raise FieldTypeError(attr_name, attr_val, f"(expected {python_type.__name__})") from exc
