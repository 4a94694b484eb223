import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

OPERATION_NAMES = ("add", "sub", "mul", "div")


def _read_toml(config_path: str) -> dict[str, Any]:
    """
    Read a TOML file into a dictionary.

    Raises
    ------
    FileNotFoundError
        If no file exists at `config_path`.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_path, "rb") as f:
        return tomllib.load(f)


@dataclass
class TensorConfiguration:
    """Settings applied to every tensor built from a configuration file."""

    dtype: str | None = None  # None lets NumPy infer the dtype from the operands
    bounds_check: bool = True

    @classmethod
    def load(cls, config_path: str) -> "TensorConfiguration":
        """
        Load tensor settings from a TOML file.

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file containing a "tensor" table.

        Returns
        -------
        TensorConfiguration
            Instance populated from the "tensor" table; missing keys use the
            dataclass defaults.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        """
        data = _read_toml(config_path)
        return cls(**data.get("tensor", {}))


@dataclass
class OperationConfiguration:
    """One elementwise operation between two literal operands."""

    name: str
    op: str
    left: Any
    right: Any
    show_raw: bool = False
    show_properties: bool = False

    def __post_init__(self):
        """Normalize and validate the operator name."""
        self.op = self.op.lower()
        if self.op not in OPERATION_NAMES:
            raise ValueError(
                f"Unknown operation '{self.op}' for '{self.name}', "
                f"expected one of {', '.join(OPERATION_NAMES)}"
            )


@dataclass
class EvaluationConfiguration:
    """Configuration for evaluating a batch of elementwise operations."""

    tensor: TensorConfiguration = field(default_factory=TensorConfiguration)
    operations: list[OperationConfiguration] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def load(cls, config_path: str) -> "EvaluationConfiguration":
        """
        Load an evaluation configuration from a TOML file.

        The file may contain a [tensor] table with global tensor settings, a
        top-level `log_level` key and any number of [[operations]] entries.

        Parameters:
            config_path (str): Filesystem path to a TOML file.

        Returns:
            EvaluationConfiguration: Instance with one OperationConfiguration per [[operations]] entry.

        Raises:
            FileNotFoundError: If no file exists at `config_path`.
            ValueError: If an operation names an unknown operator.
        """
        data = _read_toml(config_path)

        operations = [
            OperationConfiguration(**operation_data)
            for operation_data in data.get("operations", [])
        ]
        return cls(
            tensor=TensorConfiguration(**data.get("tensor", {})),
            operations=operations,
            log_level=data.get("log_level", "INFO"),
        )
