import os
import subprocess
from pathlib import Path

from dotenv import find_dotenv

# Cache for project root path
_project_root_cache = None

# Directory that marks a checkout of this repository
_MARKER_DIR = "manifests"


def find_git_root() -> Path | None:
    try:
        git_root = subprocess.check_output(
            ["git", "rev-parse", "--show-toplevel"],
            stderr=subprocess.DEVNULL,
            text=True,
        ).strip()

        return Path(git_root)
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"(find_git_root) git root not available: {e}")
        return None


def find_dotenv_path() -> Path | None:
    dotenv_path = find_dotenv(filename=".env.common", usecwd=True, raise_error_if_not_found=False)
    if not dotenv_path:
        return None
    return Path(dotenv_path)


def find_package_checkout() -> Path | None:
    """Directory holding the k8s_dev package, if it also carries the manifests."""
    checkout = Path(__file__).resolve().parents[2]
    if (checkout / _MARKER_DIR).is_dir():
        return checkout
    return None


def find_project_root() -> Path:
    """
    Returns the directory that holds manifests/ and values/.

    Lookup order: K8S_DEV_ROOT, the checkout containing this package,
    the parent of .env.common, the git root. The result is cached after
    the first call.
    """
    global _project_root_cache

    if _project_root_cache is not None:
        return _project_root_cache

    # 1. Use K8S_DEV_ROOT if set
    project_root = os.getenv("K8S_DEV_ROOT")
    if project_root:
        _project_root_cache = Path(project_root)
        return _project_root_cache

    # 2. Use the checkout the package lives in
    checkout = find_package_checkout()
    if checkout:
        _project_root_cache = checkout
        return _project_root_cache

    # 3. Use .env.common path
    dotenv_path = find_dotenv_path()
    if dotenv_path:
        _project_root_cache = dotenv_path.parent
        return _project_root_cache

    # 4. Use git root
    git_root = find_git_root()
    if git_root:
        _project_root_cache = git_root
        return _project_root_cache

    raise FileNotFoundError("project root not found, set K8S_DEV_ROOT")


def reset_project_root_cache() -> None:
    global _project_root_cache
    _project_root_cache = None


if __name__ == "__main__":
    print("Project root:", find_project_root())
