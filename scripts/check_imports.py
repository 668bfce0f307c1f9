import sys
import importlib.util

def check_required_imports(modules : dict[str, str]) -> None:
    """
    Exit with a hint if any required module is missing. Maps import names to the distribution that provides them.
    """
    missing = { name: package for name, package in modules.items() if importlib.util.find_spec(name) is None }

    if missing:
        print(f"Error: Required modules not found: {', '.join(missing)}")
        print(f"Please run `pip install {' '.join(sorted(set(missing.values())))}`, or `pip install .` from the SrtLab directory")
        sys.exit(1)
