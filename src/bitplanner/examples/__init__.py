"""Example planning problems for bitplanner.

Examples can be run via the CLI: `bitplanner example <name>`
"""

from typing import Any, Callable, Dict, List, TypedDict

from bitplanner.encoding import CompiledProblem


class OptionInfo(TypedDict, total=False):
    """Information about a CLI option for an example."""

    name: str  # e.g., "--num-balls"
    default: Any
    type: Any  # Click type (e.g., int). Inferred from default if not set.
    help: str
    param_name: str  # Python parameter name (e.g., "num_balls")


class ExampleInfo(TypedDict, total=False):
    """Information about an example."""

    build: Callable[..., CompiledProblem]
    description: str
    options: List[OptionInfo]


def _lazy_import(module_name: str, fn_name: str = "build_problem") -> Callable[..., CompiledProblem]:
    """Lazy import to avoid loading all examples at startup."""

    def wrapper(**kwargs: Any) -> CompiledProblem:
        import importlib

        mod = importlib.import_module(f"bitplanner.examples.{module_name}")
        fn = getattr(mod, fn_name)
        return fn(**kwargs)

    return wrapper


EXAMPLES: Dict[str, ExampleInfo] = {
    "visit-all": {
        "build": _lazy_import("visit_all"),
        "description": "A single robot visits every location",
        "options": [
            {
                "name": "--num-locations",
                "type": int,
                "default": 4,
                "help": "Number of locations to visit (besides the start)",
                "param_name": "num_locations",
            },
        ],
    },
    "gripper": {
        "build": _lazy_import("gripper"),
        "description": "A two-handed robot carries balls from one room to another",
        "options": [
            {
                "name": "--num-balls",
                "type": int,
                "default": 2,
                "help": "Number of balls to carry",
                "param_name": "num_balls",
            },
        ],
    },
}
