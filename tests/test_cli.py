import numpy as np
import pytest

from boxblur.cli.batch_process import main


@pytest.mark.parametrize("argv", [[], ["only_input.png"], ["a.png", "b.png", "c.png"]])
def test_usage_error_exits_with_one(argv, capsys):
    assert main(argv) == 1
    assert "Usage:" in capsys.readouterr().err


def test_successful_run_exits_with_zero(tmp_path, write_png):
    first = write_png("a.png", np.full((3, 3, 3), 9, dtype=np.uint8))
    second = write_png("b.png", np.full((2, 4, 3), 200, dtype=np.uint8))
    out_first, out_second = tmp_path / "a_out.png", tmp_path / "b_out.png"

    code = main(["--log-level", "debug", str(first), str(out_first), str(second), str(out_second)])

    assert code == 0
    assert out_first.exists()
    assert out_second.exists()


def test_stage_failure_exits_with_one(tmp_path, capsys):
    missing = tmp_path / "missing.png"

    code = main([str(missing), str(tmp_path / "out.png")])

    err = capsys.readouterr().err
    assert code == 1
    assert "load stage failed at index 0" in err
    assert "missing.png" in err
    assert not (tmp_path / "out.png").exists()


def test_file_names_may_start_with_a_dash(tmp_path, monkeypatch, write_png, read_png):
    write_png("-in.png", np.full((2, 2, 3), 40, dtype=np.uint8))
    monkeypatch.chdir(tmp_path)

    code = main(["-in.png", "-out.png"])

    assert code == 0
    np.testing.assert_array_equal(read_png(tmp_path / "-out.png"),
                                  np.full((2, 2, 3), 40, dtype=np.uint8))


def test_files_around_log_level_option_stay_paired(tmp_path, write_png):
    source = write_png("a.png", np.zeros((1, 1, 3), dtype=np.uint8))
    target = tmp_path / "a_out.png"

    assert main([str(source), "--log-level", "warning", str(target)]) == 0
    assert target.exists()


def test_invalid_log_level_exits_with_one(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "bogus", str(tmp_path / "a.png"), str(tmp_path / "b.png")])

    assert exc_info.value.code == 1
    assert "usage:" in capsys.readouterr().err
