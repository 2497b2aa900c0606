"""Image adapter lookup.

An adapter is named either by a builtin short name ("gemini") or by the
dotted path of an ImageAdapter subclass ("my_pkg.images.MyAdapter").
Provider SDKs are only imported when their adapter is requested.
"""

from __future__ import annotations

import importlib

from crunchwrap.adapters.base import ImageAdapter

# Short name -> (class path, package that provides the SDK)
BUILTIN_ADAPTERS: dict[str, tuple[str, str]] = {
    "gemini": ("crunchwrap.adapters.gemini_adapter.GeminiImageAdapter", "google-genai"),
}


def _resolve_path(name: str) -> str:
    if name in BUILTIN_ADAPTERS:
        return BUILTIN_ADAPTERS[name][0]
    module_path, _, class_name = name.rpartition(".")
    if module_path and class_name:
        return name
    raise ValueError(
        f"Unknown image adapter '{name}'. Builtin adapters: "
        f"{', '.join(sorted(BUILTIN_ADAPTERS))}. Custom adapters are given "
        f"as a dotted path, e.g. 'my_pkg.images.MyAdapter'."
    )


def _load_class(name: str, dotted_path: str) -> type:
    module_path, _, class_name = dotted_path.rpartition(".")
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        if name not in BUILTIN_ADAPTERS:
            raise
        package = BUILTIN_ADAPTERS[name][1]
        raise ImportError(
            f"The '{name}' image adapter needs its provider SDK. Install it: pip install {package}"
        ) from exc

    cls = getattr(module, class_name, None)
    if cls is None:
        raise ImportError(f"Module '{module_path}' has no attribute '{class_name}'.")
    return cls


def get_adapter(name: str, api_key: str | None = None) -> ImageAdapter:
    """Instantiate the adapter registered under name.

    Raises:
        ValueError: Unknown short name.
        ImportError: Module or SDK missing, with an install hint for builtins.
        TypeError: The resolved object is not an ImageAdapter subclass.
    """
    dotted_path = _resolve_path(name)
    cls = _load_class(name, dotted_path)
    if not (isinstance(cls, type) and issubclass(cls, ImageAdapter)):
        raise TypeError(f"'{dotted_path}' is not a subclass of ImageAdapter.")
    return cls(api_key=api_key)
