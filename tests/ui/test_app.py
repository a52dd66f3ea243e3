# tests/ui/test_app.py
from pathlib import Path

from retro_chip8.ui.app import parse_args, load_config

def test_parse_args_defaults():
    args = parse_args([])
    assert args.program is None
    assert args.config is None
    assert args.log_level == "WARNING"

def test_program_argument_overrides_config(tmp_path):
    config_path = tmp_path / "system.yaml"
    config_path.write_text("program: other.ch8\nseed: 3\n")
    rom = tmp_path / "game.ch8"

    config = load_config(parse_args([str(rom), "--config", str(config_path), "--log-level", "DEBUG"]))

    assert config.program == str(rom.resolve())
    assert config.seed == 3

def test_load_config_without_file():
    config = load_config(parse_args(["demo.ch8"]))
    assert Path(config.program).name == "demo.ch8"
    assert config.seed is None
