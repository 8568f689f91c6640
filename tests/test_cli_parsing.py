import pandas as pd
import pytest

from scgOpt.cli import app
from scgOpt.config import PartitionConfig
from scgOpt.partition import MatrixType


@pytest.fixture
def values_file(work_dir):
    path = work_dir / "values.txt"
    path.write_text("5\n1\n3\n2\n4\n")
    return path


@pytest.fixture
def weights_file(work_dir):
    path = work_dir / "weights.txt"
    path.write_text("0.2\n0.2\n0.2\n0.2\n0.2\n")
    return path


def test_cli_help(cli_runner, work_dir):
    """Verify the top-level --help exits cleanly."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"--help failed:\n{result.output}"


def test_cli_subcommand_help(cli_runner, work_dir):
    result = cli_runner.invoke(app, ["partition", "--help"])
    assert result.exit_code == 0, f"partition --help failed:\n{result.output}"
    assert "--n-groups" in result.output


def test_cli_version(cli_runner, work_dir):
    """Verify --version prints the version string."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "scgopt version" in result.output.lower()


def test_cli_partition(cli_runner, work_dir, values_file):
    output_file = work_dir / "labels.tsv"
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "2",
            "--output-file", str(output_file),
        ],
    )
    assert result.exit_code == 0, f"partition failed:\n{result.output}"

    df = pd.read_csv(output_file, sep="\t")
    assert df["group"].tolist() == [1, 0, 1, 0, 1]
    assert (work_dir / "logs").is_dir()


def test_cli_partition_default_output(cli_runner, work_dir, values_file):
    result = cli_runner.invoke(
        app, ["partition", "--values-file", str(values_file), "--n-groups", "3"]
    )
    assert result.exit_code == 0, f"partition failed:\n{result.output}"
    assert (work_dir / "values.txt.partition.tsv").exists()


def test_cli_partition_stochastic(cli_runner, work_dir, values_file, weights_file):
    output_file = work_dir / "labels.tsv"
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "2",
            "--matrix-type", "stochastic",
            "--weights-file", str(weights_file),
            "--output-file", str(output_file),
        ],
    )
    assert result.exit_code == 0, f"partition failed:\n{result.output}"
    groups = pd.read_csv(output_file, sep="\t")["group"].to_numpy()
    # values 1 and 2 form the low group, 4 and 5 the high one
    assert groups[1] == groups[3] == 0
    assert groups[0] == groups[4] == 1


def test_cli_stochastic_without_weights(cli_runner, work_dir, values_file):
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "2",
            "--matrix-type", "stochastic",
        ],
    )
    assert result.exit_code != 0
    assert isinstance(result.exception, (ValueError, SystemExit))


def test_cli_too_many_groups(cli_runner, work_dir, values_file):
    output_file = work_dir / "labels.tsv"
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "5",
            "--output-file", str(output_file),
        ],
    )
    assert result.exit_code == 1
    assert not output_file.exists()


def test_cli_rejects_unknown_matrix_type(cli_runner, work_dir, values_file):
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "2",
            "--matrix-type", "adjacency",
        ],
    )
    assert result.exit_code == 2


def test_cli_partition_column(cli_runner, work_dir):
    table = work_dir / "vectors.csv"
    pd.DataFrame(
        {"node": list("abcde"), "v1": [1.0, 2.0, 3.0, 4.0, 5.0], "v2": [5.0, 1.0, 3.0, 2.0, 4.0]}
    ).to_csv(table, index=False)
    output_file = work_dir / "labels.tsv"
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(table),
            "--column", "v2",
            "--n-groups", "2",
            "--output-file", str(output_file),
        ],
    )
    assert result.exit_code == 0, f"partition failed:\n{result.output}"
    df = pd.read_csv(output_file, sep="\t")
    assert df["value"].tolist() == [5.0, 1.0, 3.0, 2.0, 4.0]
    assert df["group"].tolist() == [1, 0, 1, 0, 1]


def test_cli_weights_ignored_for_symmetric(cli_runner, work_dir, values_file):
    skewed = work_dir / "skewed.txt"
    skewed.write_text("0.96\n0.01\n0.01\n0.01\n0.01\n")
    output_file = work_dir / "labels.tsv"
    result = cli_runner.invoke(
        app,
        [
            "partition",
            "--values-file", str(values_file),
            "--n-groups", "2",
            "--weights-file", str(skewed),
            "--output-file", str(output_file),
        ],
    )
    assert result.exit_code == 0, f"partition failed:\n{result.output}"
    assert pd.read_csv(output_file, sep="\t")["group"].tolist() == [1, 0, 1, 0, 1]


def test_partition_config_drops_weights_for_symmetric(work_dir, values_file, weights_file):
    config = PartitionConfig(
        values_file=values_file,
        n_groups=2,
        matrix_type=MatrixType.SYMMETRIC,
        weights_file=weights_file,
    )
    assert config.weights_file is None
    assert config.output_file == values_file.with_name("values.txt.partition.tsv")
