import pytest

from tools.benchmark import format_time, main, parse_number, run_benchmark


@pytest.mark.parametrize("text, expected", [
    ("200", 200),
    ("2k", 2000),
    ("1.5K", 1500),
    ("1m", 1_000_000),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected


def test_format_time():
    assert format_time(0.0000042) == "4us"
    assert format_time(0.0123) == "12.30ms"
    assert format_time(2.5) == "2.50s"


def test_run_benchmark_reports_step_times():
    result = run_benchmark(20, steps=3, seed=1, warmup=1)

    assert result["num_boids"] == 20
    assert result["steps"] == 3
    assert result["min"] <= result["mean"] <= result["max"]
    assert result["total"] == pytest.approx(result["mean"] * 3)


def test_run_benchmark_needs_a_step():
    with pytest.raises(ValueError):
        run_benchmark(5, steps=0)


def test_main_takes_bird_count(capsys):
    results = main(["--count", "7", "--steps", "2", "--warmup", "0", "--seed", "2"])

    assert [r["num_boids"] for r in results] == [7]
    assert "[Bench] 7 birds x 2 steps" in capsys.readouterr().out


def test_main_sweeps_counts(capsys):
    results = main(["--sweep", "5,10", "--steps", "2", "--warmup", "0", "--seed", "3"])

    assert [r["num_boids"] for r in results] == [5, 10]
    out = capsys.readouterr().out
    assert "[Bench] 5 birds x 2 steps" in out
    assert "[Bench] 10 birds x 2 steps" in out
