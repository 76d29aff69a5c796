"""Runtime orchestration: bootstrap, event loop, runner and output pumps."""

from __future__ import annotations


def run_dashboard(*args, **kwargs):
    """Lazily import the bootstrap to keep package imports lightweight."""
    from .app import run_dashboard as _run_dashboard

    return _run_dashboard(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"RuntimeLoopCallbacks", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_dashboard",
    "run_main_loop",
]
