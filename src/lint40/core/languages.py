from pathlib import Path

_EXTENSION_LANGUAGE_MAP = {
    ".c": "c",
    ".h": "c",
}


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def is_c_source(file_path: Path) -> bool:
    return file_path.suffix.lower() in _EXTENSION_LANGUAGE_MAP


def collect_sources(paths: list[Path]) -> list[Path]:
    """Expand directories into the C sources below them; explicit files are kept as given."""
    sources: list[Path] = []
    for path in paths:
        if path.is_dir():
            sources.extend(sorted(p for p in path.rglob("*") if p.is_file() and is_c_source(p)))
        else:
            sources.append(path)
    return sources
