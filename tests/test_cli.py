import os

import pytest
from graph_explorer import cli

DATA = os.path.join(os.path.dirname(__file__), "data")


def _path(name: str) -> str:
    return os.path.join(DATA, name)


def test_both_strategies_agree(capsys: pytest.CaptureFixture[str]):
    assert cli.main(["--n_workers", "4", _path("line.dot"), "b"]) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "--- Sequential ---" in out
    assert "--- Parallel (4 workers) ---" in out
    assert out.count("Explored 4 nodes.") == 2
    assert out.count(" us.") == 2
    assert "Nodes:" not in out


def test_verbose_listing(capsys: pytest.CaptureFixture[str]):
    assert cli.main(["--verbose", _path("triangle.dot"), "b"]) == cli.EXIT_OK

    out = capsys.readouterr().out
    listing = [line for line in out.splitlines() if line.startswith("\t- ")]
    expected = [
        "\t- b at distance 0",
        "\t- a at distance 1",
        "\t- c at distance 1",
    ]
    assert listing == expected + expected


def test_quoted_start(capsys: pytest.CaptureFixture[str]):
    argv = ["--n-workers", "2", "--verbose", _path("quoted.dot"), '"New York"']
    assert cli.main(argv) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "\t- New York at distance 0" in out
    assert "\t- Tokyo at distance 2" in out
    assert "Lonely" not in out


def test_unknown_start(caplog: pytest.LogCaptureFixture):
    assert cli.main([_path("triangle.dot"), "z"]) == cli.EXIT_ERROR
    assert "invalid starting node: z" in caplog.text


def test_missing_file(tmp_path):
    assert cli.main([str(tmp_path / "missing.dot"), "a"]) == cli.EXIT_ERROR


def test_parse_failure(tmp_path):
    path = tmp_path / "empty.dot"
    path.write_text("digraph empty {}")
    assert cli.main([str(path), "a"]) == cli.EXIT_ERROR


@pytest.mark.parametrize("n_workers", ["0", "-1", "many"])
def test_invalid_worker_count(n_workers: str):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--n_workers", n_workers, _path("triangle.dot"), "a"])
    assert exc.value.code != 0


def test_missing_start():
    with pytest.raises(SystemExit) as exc:
        cli.main([_path("triangle.dot")])
    assert exc.value.code != 0


def test_workers_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    monkeypatch.setenv(cli.N_WORKERS_ENV, "3")
    assert cli.main([_path("triangle.dot"), "a"]) == cli.EXIT_OK
    assert "--- Parallel (3 workers) ---" in capsys.readouterr().out


def test_mismatch_is_reported(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    async def wrong_results(graph, strategy, starts):
        report = await run_strategy(graph, strategy, starts)
        if strategy.name != "Sequential":
            report.results = report.results[:-1]
        return report

    run_strategy = cli.run_strategy
    monkeypatch.setattr(cli, "run_strategy", wrong_results)

    assert cli.main([_path("triangle.dot"), "a"]) == cli.EXIT_MISMATCH
    assert "produced different results" in caplog.text
