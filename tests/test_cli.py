"""Tests for the command-line interface."""

import json

import pytest

from wallrotate.cli import build_parser, main
from wallrotate.commands.configure import apply_options
from wallrotate.config import RotationConfig, WallpaperConfig
from wallrotate.exceptions import ConfigValidationError
from wallrotate.schedule import ScheduleConstraints


@pytest.fixture
def run_cli(store, monkeypatch):
    """Run main() against the temporary config file."""

    def run(*args: str) -> int:
        monkeypatch.setattr("sys.argv", ["wallrotate", "-c", str(store.config_file), *args])
        return main()

    return run


class TestParser:
    """Test argument parsing."""

    def test_default_command_is_none(self):
        args = build_parser().parse_args([])
        assert args.command is None

    def test_mode_flags(self):
        parser = build_parser()
        assert parser.parse_args(["set"]).random is None
        assert parser.parse_args(["set", "--random"]).random is True
        assert parser.parse_args(["set", "--sequential"]).random is False

    def test_mode_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["set", "--random", "--sequential"])


class TestTargetCommands:
    """Test add, remove and list."""

    def test_add_and_list(self, run_cli, store, image_dir, capsys):
        assert run_cli("add", str(image_dir)) == 0
        assert "Added 4 image(s)" in capsys.readouterr().out
        assert len(store.read().targets) == 4

        assert run_cli("list") == 0
        out = capsys.readouterr().out
        assert "a.jpg" in out
        assert "d.webp" in out

    def test_remove(self, run_cli, store, image_dir, capsys):
        run_cli("add", str(image_dir))

        assert run_cli("remove", str(image_dir / "a.jpg"), str(image_dir / "b.png")) == 0

        assert "2 target(s) remaining" in capsys.readouterr().out
        assert [t.name for t in store.read().targets] == ["c.JPEG", "d.webp"]

    def test_add_without_images_fails(self, run_cli, store, image_dir, capsys):
        assert run_cli("add", str(image_dir / "notes.txt"), str(image_dir / "missing")) == 1
        assert "No images found" in capsys.readouterr().err
        assert not store.exists()

    def test_list_empty(self, run_cli, capsys):
        assert run_cli("list") == 0
        assert "No targets configured" in capsys.readouterr().out


class TestSetCommand:
    """Test editing settings."""

    def test_set_options(self, run_cli, store):
        assert run_cli("set", "--sequential", "--interval", "0", "--start", "09:00",
                       "--weekly", "mon", "tue", "--monthly", "1", "15") == 0

        config = store.read()
        assert config.random is False
        assert config.interval == 0
        assert config.schedule == ScheduleConstraints(start_time="09:00", weekly=["mon", "tue"], monthly=[1, 15])

    def test_clear_constraint(self, run_cli, store):
        store.save(RotationConfig(schedule=ScheduleConstraints(start_time="09:00", weekly=["mon"])))

        assert run_cli("set", "--start", "none", "--weekly", "off") == 0

        assert store.read().schedule == ScheduleConstraints()

    def test_negative_interval_rejected(self, run_cli, store):
        assert run_cli("set", "--interval", "-5") == 78
        assert not store.exists()

    def test_set_keeps_targets(self, run_cli, store, targets):
        store.save(RotationConfig(targets=targets))

        run_cli("set", "--random")

        assert store.read().targets == targets


class TestApplyOptions:
    """Test option application without the CLI."""

    def test_returns_copy(self):
        config = RotationConfig()
        updated = apply_options(config, interval=5, command="feh")

        assert updated.interval == 5
        assert updated.wallpaper.command == "feh"
        assert config.interval == 60

    def test_monthly_must_be_numeric(self):
        with pytest.raises(ConfigValidationError):
            apply_options(RotationConfig(), monthly=["first"])

    def test_none_leaves_settings(self):
        config = RotationConfig(random=False, schedule=ScheduleConstraints(end_time="17:00"))
        assert apply_options(config) == config


class TestStatusAndValidate:
    """Test status, init and validate."""

    def test_status_json(self, run_cli, store, targets, temp_config_dir, capsys):
        missing = temp_config_dir / "gone.jpg"
        store.save(RotationConfig(
            interval=0,
            random=False,
            targets=targets + [missing],
            wallpaper=WallpaperConfig(command="custom:true {path}"),
        ))

        assert run_cli("status", "--json") == 0

        status = json.loads(capsys.readouterr().out)
        assert status["mode"] == "sequential"
        assert status["interval"] == 60
        assert status["targets"] == 4
        assert status["missing_targets"] == [str(missing)]
        assert status["daemon_pid"] is None
        assert status["wallpaper"]["backend"] == "CustomSetter"
        assert status["schedule"]["active_now"] is True

    def test_status_text_with_bad_backend(self, run_cli, store, capsys):
        store.save(RotationConfig(wallpaper=WallpaperConfig(command="bogus")))

        assert run_cli("status") == 0
        assert "unavailable" in capsys.readouterr().out

    def test_init(self, run_cli, store, capsys):
        assert run_cli("init") == 0
        assert store.exists()
        assert "initialized" in capsys.readouterr().out

        assert run_cli("init") == 0
        assert "already exists" in capsys.readouterr().out

    def test_validate_ok(self, run_cli, store, capsys):
        store.save(RotationConfig(wallpaper=WallpaperConfig(command="custom:true {path}")))

        assert run_cli("validate") == 0
        assert "✓" in capsys.readouterr().out

    def test_validate_schedule_problem(self, run_cli, store):
        store.save(RotationConfig(
            schedule=ScheduleConstraints(start_time="9am"),
            wallpaper=WallpaperConfig(command="custom:true {path}"),
        ))

        assert run_cli("validate") == 78

    def test_validate_corrupt_file(self, run_cli, store):
        store.config_file.parent.mkdir(parents=True, exist_ok=True)
        store.config_file.write_text("[rotation\n")

        assert run_cli("validate") == 78

    def test_validate_unknown_section(self, run_cli, store, capsys):
        store.config_file.write_text("[monitors]\ncount = 2\n")

        assert run_cli("validate") == 78
        assert "Unknown config section" in capsys.readouterr().err
