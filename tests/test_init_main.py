from __future__ import annotations

import importlib


def test_package_version_exposes_string() -> None:
    mod = importlib.import_module("doc2slides")
    v = getattr(mod, "__version__", None)
    assert isinstance(v, str)


def test_package_reexports_public_api() -> None:
    mod = importlib.import_module("doc2slides")
    for name in ("generate_slides", "SegmentationOptions", "HtmlSlide", "MediaSlide"):
        assert hasattr(mod, name)


def test_main_module_imports() -> None:
    # Ensure __main__ module imports without executing CLI
    importlib.import_module("doc2slides.__main__")
