import logging

import pytest

from thumbnailer.main import EXIT_FATAL, EXIT_OK, build_config, main, parse_args


def test_defaults():
    config = build_config(parse_args([]))
    assert str(config.input_dir) == "originals"
    assert str(config.output_dir) == "output"
    assert config.spec.target_size == 150
    assert config.spec.allow_upscale
    assert config.spec.background == (0, 0, 0)
    assert config.workers == 1


def test_flags():
    config = build_config(parse_args(["-s", "64", "--no-upscale", "--background", "#FFFFFF", "-j", "4"]))
    assert config.spec.target_size == 64
    assert not config.spec.allow_upscale
    assert config.spec.background == (255, 255, 255)
    assert config.workers == 4


@pytest.mark.parametrize("argv", [["-s", "0"], ["-s", "abc"], ["--background", "blue"], ["-j", "-1"]])
def test_invalid_flags(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_missing_input_dir_exit_code(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        code = main(["-i", str(tmp_path / "nope"), "-o", str(tmp_path / "out")])
    assert code == EXIT_FATAL
    assert "nope" in caplog.text


def test_run_with_failures_exits_ok(input_dir, tmp_path, make_image, corrupt_file):
    make_image("photo.png")
    out_dir = tmp_path / "out"
    code = main(["-i", str(input_dir), "-o", str(out_dir), "-s", "32"])
    assert code == EXIT_OK
    assert [p.name for p in out_dir.iterdir()] == ["photo.png"]
