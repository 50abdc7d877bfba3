import csv
import math

import pytest

from so3lab.logger import PathLogger
from so3lab.topology.loops import generate_loop

TWO_PI = 2 * math.pi
FOUR_PI = 4 * math.pi


def read_rows(path):
    with open(path, "r", newline="") as f:
        return list(csv.reader(f))


# --- Tests ---

def test_logger_basic_io(tmp_path):
    """Test that logger creates file and writes header + one row per sample."""
    log_path = tmp_path / "test_basic.csv"

    with PathLogger(str(log_path), buffer_size=1) as logger:
        logger.log(generate_loop((1, 0, 0), TWO_PI, 10))

    assert log_path.exists()
    rows = read_rows(log_path)

    # Header + N+1 samples
    assert len(rows) == 1 + 11

    header = rows[0]
    # run, total_angle, t + p(3) + q(4) + lift(4) + jump = 15 columns
    assert len(header) == 15
    assert header[:3] == ["run", "total_angle", "t"]
    assert "p_x" in header
    assert "q_w" in header
    assert "lift_z" in header
    assert header[-1] == "jump"

    assert float(rows[1][2]) == 0.0
    assert float(rows[-1][2]) == 1.0
    assert float(rows[1][1]) == pytest.approx(TWO_PI)


def test_logger_jump_column(tmp_path):
    log_path = tmp_path / "jumps.csv"
    loop = generate_loop((0, 0, 1), TWO_PI, 200)

    with PathLogger(log_path) as logger:
        logger.log(loop)

    rows = read_rows(log_path)
    jump_col = rows[0].index("jump")
    flagged = [i for i, row in enumerate(rows[1:]) if row[jump_col] == "1"]
    assert flagged == list(loop.jump_indices) == [101]


def test_logger_lift_columns_follow_sheet(tmp_path):
    """The lift of a 2π loop ends at -1, the raw quaternion column agrees."""
    log_path = tmp_path / "lift.csv"

    with PathLogger(log_path, fields=["q", "lift"]) as logger:
        logger.log(generate_loop((1, 0, 0), TWO_PI, 100))

    rows = read_rows(log_path)
    header = rows[0]
    last = rows[-1]
    assert float(last[header.index("lift_w")]) == pytest.approx(-1.0)
    assert float(last[header.index("q_w")]) == pytest.approx(-1.0)


def test_logger_buffering(tmp_path):
    """Test that data is buffered and only written when buffer fills or flush is called."""
    log_path = tmp_path / "test_buffer.csv"
    buffer_size = 50

    logger = PathLogger(str(log_path), buffer_size=buffer_size)

    # 1. Log fewer samples than buffer size (N=20 -> 21 rows)
    logger.log(generate_loop((1, 0, 0), TWO_PI, 20))

    # File should exist but contain only header
    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1

    # 2. Log enough to cross the buffer size: 21 + 41 = 62 rows, one flush at 50
    logger.log(generate_loop((1, 0, 0), FOUR_PI, 40))

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1 + buffer_size

    # 3. Close flushes the rest
    logger.close()

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1 + 62


@pytest.mark.filterwarnings("ignore:Angular step:RuntimeWarning")
def test_logger_run_counter(tmp_path):
    log_path = tmp_path / "runs.csv"

    with PathLogger(log_path, fields=["p"]) as logger:
        logger.log(generate_loop((1, 0, 0), TWO_PI, 4))
        logger.log(generate_loop((1, 0, 0), FOUR_PI, 4))
        assert logger.runs == 2

    rows = read_rows(log_path)[1:]
    assert [row[0] for row in rows] == ["0"] * 5 + ["1"] * 5
    assert float(rows[-1][1]) == pytest.approx(FOUR_PI)


def test_logger_custom_fields(tmp_path):
    """Test logging with a restricted set of fields."""
    log_path = tmp_path / "test_custom.csv"

    with PathLogger(str(log_path), fields=["p", "jump"]) as logger:
        logger.log(generate_loop((0, 1, 0), TWO_PI, 8))

    header = read_rows(log_path)[0]
    # run, total_angle, t + p(3) + jump = 7 columns
    assert len(header) == 7
    assert header == logger.header()
    assert header[3] == "p_x"
    assert "q_w" not in header
    assert "lift_w" not in header


def test_logger_invalid_fields(tmp_path):
    with pytest.raises(ValueError, match="Invalid fields"):
        PathLogger(tmp_path / "bad.csv", fields=["p", "omega"])


def test_logger_invalid_buffer_size(tmp_path):
    with pytest.raises(ValueError, match="buffer_size"):
        PathLogger(tmp_path / "bad.csv", buffer_size=0)


def test_logger_creates_parent_directories(tmp_path):
    log_path = tmp_path / "nested" / "dir" / "loops.csv"
    with PathLogger(log_path) as logger:
        logger.log(generate_loop((1, 0, 0), TWO_PI, 8))
    assert log_path.exists()
