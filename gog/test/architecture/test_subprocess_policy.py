from __future__ import annotations

from ._gate import require_arch_checks_enabled
from ._utils import import_violations, package_files


def test_subprocess_is_only_imported_by_the_process_wrapper() -> None:
    require_arch_checks_enabled()

    offenders = import_violations(package_files(), ["subprocess"], allow={"platform/process.py"})

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)


def test_only_the_git_backend_starts_processes() -> None:
    require_arch_checks_enabled()

    offenders = import_violations(
        package_files(),
        ["gog.platform.process"],
        allow={"platform/__init__.py", "git/repository.py"},
    )

    assert not offenders, "Process wrapper used outside the git backend:\n" + "\n".join(offenders)
