"""Base class for DSPy programs that can be swapped for an optimized copy.

An optimizer run (outside this package) saves the compiled program as JSON;
``create_with_best_model`` picks up the first file found from the
subclass's ``optimized_files`` list and otherwise runs zero-shot.
"""

import logging
from abc import abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, ClassVar, TypeVar, cast

import dspy
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_OPTIMIZED_DIR = Path(__file__).parent / "optimized"


def _as_mapping(result: Any) -> dict[str, Any] | None:
    if isinstance(result, dict):
        return result
    store = getattr(result, "_store", None)
    if isinstance(store, dict):
        return store
    if isinstance(result, BaseModel):
        return result.model_dump()
    return None


def validate_dspy_result(result: Any, model_class: type[T]) -> T:
    """Coerce a prediction field into ``model_class``.

    Accepts the model itself, a dict, another pydantic model, or a
    Prediction-like object exposing ``_store``.

    Raises:
        TypeError: If ``result`` has none of those shapes.
        ValidationError: If its fields do not fit ``model_class``.
    """
    if isinstance(result, model_class):
        return result

    data = _as_mapping(result)
    if data is None:
        raise TypeError(f"Cannot convert {type(result).__name__} to {model_class.__name__}")
    return cast(T, model_class.model_validate(data))


def safe_extract_result(
    result: Any,
    model_class: type[T],
    default_factory: Callable[[], T],
    context: str = "Extraction",
) -> T:
    """Extract a validated result, falling back to ``default_factory`` on bad output.

    Only malformed model output is absorbed here; provider failures are raised
    by the predictor before this point.
    """
    try:
        return validate_dspy_result(result, model_class)
    except (ValidationError, TypeError) as e:
        logger.warning(f"{context} validation failed: {e}. Falling back to default.")
        return default_factory()


class OptimizableDSPyModule(dspy.Module):
    """Base class for DSPy modules that support optimization.

    Subclasses should:
    1. Set `optimized_files` with priority-ordered filenames
    2. Override `_create_predictor()` to define the signature
    3. Implement `aforward()` and `forward()`
    """

    optimized_files: ClassVar[list[str]] = []

    default_use_cot: ClassVar[bool] = False

    def __init__(self, use_cot: bool | None = None):
        super().__init__()
        effective_cot = use_cot if use_cot is not None else self.default_use_cot
        self.predictor = self._create_predictor(effective_cot)

    @abstractmethod
    def _create_predictor(self, use_cot: bool) -> dspy.Module:
        """Create the DSPy predictor/chain for this module."""
        ...

    @classmethod
    def create_with_best_model(
        cls,
        use_cot: bool | None = None,
        optimized_dir: Path | None = None,
    ) -> "OptimizableDSPyModule":
        """Create an instance, loading the best optimized program available.

        Args:
            use_cot: Whether to use ChainOfThought reasoning.
            optimized_dir: Where to look for optimized programs
                (defaults to the ``optimized/`` directory next to this module).
        """
        instance = cls(use_cot=use_cot)
        instance._load_best_optimization(optimized_dir or DEFAULT_OPTIMIZED_DIR)
        return instance

    def _load_best_optimization(self, base_path: Path) -> bool:
        for filename in self.optimized_files:
            file_path = base_path / filename
            if file_path.exists():
                logger.info(f"Loading optimized module from {file_path}")
                try:
                    self.load(str(file_path))
                    return True
                except (OSError, ValueError, KeyError) as e:
                    logger.warning(f"Failed to load optimized module {filename}: {e}")
            else:
                logger.debug(f"Optimized module not found: {filename}")

        logger.info(f"No optimized {self.__class__.__name__} found, using default zero-shot.")
        return False
