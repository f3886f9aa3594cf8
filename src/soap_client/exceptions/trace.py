"""
Call-site capture for API errors.

An `ApiError` records which component (class, or module for plain functions) and which
operation (function/method name) were running when it was created. Frames that belong to
this exceptions package, and to `contextlib` (the error handler context manager), are
skipped so the first entry is the caller's own code.
"""

import inspect
from dataclasses import dataclass
from types import FrameType

_INTERNAL_PACKAGE = __name__.rpartition(".")[0]
_SKIPPED_MODULES = ("contextlib",)


@dataclass(frozen=True)
class CallSite:
    component: str
    operation: str


UNKNOWN_CALL_SITE = CallSite(component="<unknown>", operation="<unknown>")


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    if module == _INTERNAL_PACKAGE or module.startswith(_INTERNAL_PACKAGE + "."):
        return True
    return module in _SKIPPED_MODULES


def call_site_from_frame(frame: FrameType) -> CallSite:
    """
    Build a CallSite from a frame.

    `co_qualname` gives "ContactService.add" for methods; the part before the last dot is the
    owning class. Nested functions ("Svc.run.<locals>.retry") report the innermost definition,
    and module-level code reports the module name as component.
    """
    module = frame.f_globals.get("__name__", "<unknown>")
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    qualname = qualname.rsplit(".<locals>.", 1)[-1]
    owner, _, operation = qualname.rpartition(".")
    return CallSite(component=owner or module, operation=operation)


def _belongs_to(frame: FrameType, error: BaseException | None) -> bool:
    return error is not None and frame.f_locals.get("self") is error


def capture_call_sites(error: BaseException | None = None) -> list[CallSite]:
    """
    Return the current call chain outside this package, innermost first.

    Frames running a method of `error` itself (a user subclass's `__init__`) are skipped too,
    so the first entry is the code that created the error.
    """
    frame = inspect.currentframe()
    sites: list[CallSite] = []
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None:
            if not _is_internal(frame) and not _belongs_to(frame, error):
                sites.append(call_site_from_frame(frame))
            frame = frame.f_back
    finally:
        # Break the reference cycle between this frame and the local.
        del frame
    return sites


def oldest_call_site() -> CallSite:
    """Return the bottom of the current call chain (usually the program entry point)."""
    frame = inspect.currentframe()
    if frame is None:
        return UNKNOWN_CALL_SITE
    try:
        while frame.f_back is not None:
            frame = frame.f_back
        return call_site_from_frame(frame)
    finally:
        del frame
