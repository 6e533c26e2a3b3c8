"""Helper for updating the phonebook version variables from the toml file."""

import re
import sys
from pathlib import Path


TOML_PATH = Path(Path(__file__).parent, "pyproject.toml")
PHONEBOOK_PATH = Path(Path(__file__).parent, "phonebook/__init__.py")


def parse_version(version_str: str) -> tuple[int, int, int]:
    """Parse a version string into major, minor, patch tuple."""
    match = re.match(r"^(\d+)\.(\d+)\.(\d+)$", version_str.strip("\"'"))
    if not match:
        raise ValueError(f"Invalid version format: {version_str}")
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def get_current_version_from_toml(toml_path: Path = TOML_PATH) -> tuple[int, int, int]:
    """Extract the project version from the TOML file."""
    content = toml_path.read_text()
    match = re.search(r'^version\s*=\s*["\'](\d+\.\d+\.\d+)["\']', content, re.M)

    if not match:
        raise ValueError(f"No version field found in {toml_path}")

    return parse_version(match.group(1))


def update_python_version(
    new_version: tuple[int, int, int], package_path: Path = PHONEBOOK_PATH
) -> str:
    """
    Rewrite the version_major, version_minor and version_patch constants at
    the top of the phonebook package. Returns the new version string.
    """
    content = package_path.read_text(encoding="utf-8")

    for part, number in zip(("major", "minor", "patch"), new_version):
        content, count = re.subn(
            rf"^version_{part}\s*=\s*\d+", f"version_{part} = {number}", content, flags=re.M
        )
        if count != 1:
            raise ValueError(f"Expected one version_{part} constant in {package_path}")

    package_path.write_text(content, encoding="utf-8")
    return ".".join(str(number) for number in new_version)


def main() -> int:
    version = update_python_version(get_current_version_from_toml())
    print(f"phonebook.__version__ is now {version}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
