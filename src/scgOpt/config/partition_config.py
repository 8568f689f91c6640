"""
Configuration for the partition command.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer

from scgOpt.partition.constants import MatrixType

from .base import ConfigMixin, ensure_path_exists

logger = logging.getLogger("scgOpt.config")


@dataclass
class PartitionConfig(ConfigMixin):
    """Optimal Partition Configuration"""

    values_file: Annotated[Path, typer.Option(
        help="File with the values to partition (.npy, .txt, .csv or .tsv)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True
    )]

    n_groups: Annotated[int, typer.Option(
        help="Number of groups; must be smaller than the number of unique values",
        min=1
    )]

    matrix_type: Annotated[MatrixType, typer.Option(
        help="Matrix interpretation selecting the cost kernel",
        case_sensitive=False
    )] = MatrixType.SYMMETRIC

    weights_file: Annotated[Optional[Path], typer.Option(
        help="File with the probability weights (required for the stochastic matrix type)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True
    )] = None

    column: Annotated[Optional[str], typer.Option(
        help="Column to read from tabular input files"
    )] = None

    output_file: Annotated[Optional[Path], typer.Option(
        help="Where to write the labels (tab separated). Defaults to <values_file>.partition.tsv",
        dir_okay=False,
        resolve_path=True
    )] = None

    def __post_init__(self):
        self.values_file = Path(self.values_file)
        self.matrix_type = MatrixType.parse(self.matrix_type)

        if self.n_groups < 1:
            raise ValueError(f"n_groups must be at least 1, got {self.n_groups}")

        if self.matrix_type.is_weighted and self.weights_file is None:
            raise ValueError("--weights-file is required when --matrix-type is stochastic.")
        if not self.matrix_type.is_weighted and self.weights_file is not None:
            logger.warning(f"--weights-file is ignored for the {self.matrix_type.value} matrix type")
            self.weights_file = None

        if self.output_file is None:
            self.output_file = self.values_file.with_name(f"{self.values_file.name}.partition.tsv")
        self.output_file = Path(self.output_file)

    @property
    @ensure_path_exists
    def labels_path(self) -> Path:
        return self.output_file
