import logging
from pathlib import Path

import pytest

from capped_multiset.cli import check_capped_sum
from capped_multiset.cli.check_capped_sum import cross_check, main


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("capped_multiset")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_cross_check():
    assert cross_check([1, 2, 3, 4, 5], None)
    assert cross_check([1, 2, 3, 4, 5], 2)
    assert cross_check([], 0)


def test_main_succeeds():
    assert main(["-max_size", "2", "-num_samples", "20", "-random_seed", "3"]) == 0


def test_main_writes_logs(tmp_path: Path):
    outputs = tmp_path / "out"
    assert main(["-max_size", "1", "-num_samples", "5", "-outputs_folder", str(outputs), "-v"]) == 0
    assert "Proofs: 2/2 sizes, samples: 5/5 matched" in (outputs / "info.log").read_text()
    assert (outputs / "debug.log").exists()


def test_main_reports_failed_proof(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        check_capped_sum, "verify_up_to", lambda max_size, timeout: {0: True, 1: False}
    )
    assert main(["-max_size", "1", "-num_samples", "0"]) == 1


def test_main_reports_mismatch(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(check_capped_sum, "verify_up_to", lambda max_size, timeout: {})
    monkeypatch.setattr(check_capped_sum, "cross_check", lambda values, cap: False)
    assert main(["-num_samples", "3"]) == 1


@pytest.mark.parametrize(
    "args", [["-max_size", "-1"], ["-timeout", "0"], ["-num_samples", "-2"]]
)
def test_main_rejects_bad_options(args: list[str], capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as exit_info:
        main(args)
    assert exit_info.value.code == 2
    assert "must be" in capsys.readouterr().err


def test_main_replays_random_file(tmp_path: Path):
    rand_file = tmp_path / "rands.txt"
    rand_file.write_text("4 17 0 99 3\n52 1\n")
    args = ["-max_size", "1", "-num_samples", "10", "-random_file", str(rand_file)]
    assert main(args) == 0


def test_main_rejects_empty_random_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
):
    rand_file = tmp_path / "empty.txt"
    rand_file.write_text("")
    with pytest.raises(SystemExit) as exit_info:
        main(["-max_size", "0", "-random_file", str(rand_file)])
    assert exit_info.value.code == 2
    assert "contains no numbers" in capsys.readouterr().err
