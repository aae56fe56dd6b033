import sys
import typing
from typing import List, Mapping, NoReturn, Optional, Type, TypeVar

T = TypeVar("T")

_debug_mode = False


def enable_debug_mode() -> None:
    global _debug_mode
    _debug_mode = True


def debug_print(message: str) -> None:
    if _debug_mode:
        print(f"[debug] {message}", file=sys.stderr)


def exception_to_string(e: object) -> str:
    return str(e) or e.__class__.__name__


def static_assert_unreachable(x: NoReturn) -> NoReturn:
    raise Exception("Unreachable! " + repr(x))


def _json_as_type(what: str, value: object, t: Type[T]) -> T:
    # bool is an int subclass, but never a valid int/float setting
    if isinstance(value, t) and not (isinstance(value, bool) and t is not bool):
        return value
    if t is float and isinstance(value, int) and not isinstance(value, bool):
        return typing.cast(T, float(value))
    raise ValueError(f"{what} must have type {t.__name__}; got {type(value).__name__}")


def json_prop(
    obj: Mapping[str, object], prop: str, t: Type[T], default: Optional[T] = None
) -> T:
    value = obj.get(prop)
    if value is None and prop not in obj:
        if default is not None:
            return default
        raise ValueError(f"Member {prop} does not exist")
    return _json_as_type("Member " + prop, value, t)


def json_opt_prop(obj: Mapping[str, object], prop: str, t: Type[T]) -> Optional[T]:
    if prop not in obj:
        return None
    return _json_as_type("Member " + prop, obj[prop], t)


def json_array(obj: list, t: Type[T]) -> List[T]:
    ret = []
    for elem in obj:
        ret.append(_json_as_type("Array elements", elem, t))
    return ret
