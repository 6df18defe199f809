from __future__ import annotations

import ast
from collections.abc import Iterable, Iterator
from pathlib import Path


def gog_root() -> Path:
    return Path(__file__).resolve().parents[2]


def package_files(*packages: str) -> list[Path]:
    """Modules under the given subpackages, or the whole package minus tests."""
    root = gog_root()
    bases = [root / p for p in packages] if packages else [root]
    found: list[Path] = []
    for base in bases:
        for path in sorted(base.rglob("*.py")):
            parts = path.relative_to(root).parts
            if "__pycache__" in parts:
                continue
            if not packages and parts[0] == "test":
                continue
            found.append(path)
    return found


def absolute_imports(path: Path) -> Iterator[tuple[str, int]]:
    """(module, line) for each absolute import statement in a file."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name, node.lineno
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            yield node.module, node.lineno


def under(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def import_violations(
    files: Iterable[Path], forbidden: Iterable[str], *, allow: Iterable[str] = ()
) -> list[str]:
    """`file:line: module` for every import of a forbidden module.

    `allow` lists root-relative posix paths exempt from the check.
    """
    root = gog_root()
    prefixes = tuple(forbidden)
    exempt = set(allow)
    found: list[str] = []
    for path in files:
        rel = path.relative_to(root).as_posix()
        if rel in exempt:
            continue
        for module, line in absolute_imports(path):
            if any(under(module, prefix) for prefix in prefixes):
                found.append(f"{rel}:{line}: {module}")
    return found
