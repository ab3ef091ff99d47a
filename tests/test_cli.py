"""Tests for CLI commands."""

from __future__ import annotations

import json
from typing import Optional

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from conftest import API_KEY, BACKEND_URL, CLOUD_NAME, DASHBOARD_PAYLOAD

from fittrack.cli import app
from fittrack.config import settings as settings_module
from fittrack.config.settings import Settings

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """A complete config.yaml, with environment overrides cleared."""
    for name in (
        settings_module.ENV_APP_SCRIPT_URL,
        settings_module.ENV_API_KEY,
        settings_module.ENV_TIMEOUT,
        settings_module.ENV_CLOUDINARY_NAME,
        settings_module.ENV_CLOUDINARY_UPLOAD_PRESET,
    ):
        monkeypatch.delenv(name, raising=False)

    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "backend": {"url": BACKEND_URL, "api_key": API_KEY},
                "images": {"cloud_name": CLOUD_NAME, "upload_preset": "unsigned"},
            }
        )
    )
    return path


@pytest.fixture
def invoke(config_file, services):
    """Run the app against the fake backend."""

    def run(*args: str, stdin: Optional[str] = None):
        return runner.invoke(
            app, ["--config", str(config_file), *args], obj=services, input=stdin
        )

    return run


class TestMainCommands:
    """Tests for main CLI commands."""

    def test_help(self):
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "fitness" in result.output.lower()

    @pytest.mark.parametrize("group", ["weight", "workouts", "habits", "photos", "config"])
    def test_group_help(self, group):
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0

    def test_dashboard(self, invoke, backend):
        backend.ok("dashboard", DASHBOARD_PAYLOAD)

        result = invoke("dashboard")

        assert result.exit_code == 0
        assert "82.4 kg" in result.output
        assert "Sentadilla" in result.output

    def test_dashboard_error(self, invoke, backend):
        backend.fail("dashboard", "Hoja no encontrada")

        result = invoke("dashboard")

        assert result.exit_code == 1
        assert "Hoja no encontrada" in result.output

    def test_dashboard_json_error_kind(self, invoke, backend):
        backend.route("dashboard", httpx.Response(500))

        result = invoke("dashboard", "--json")

        assert result.exit_code == 1
        data = json.loads(result.output[result.output.index("{"):])
        assert data["success"] is False
        assert data["error_kind"] == "http_status"
        assert data["errors"] == ["Error 500: Internal Server Error"]

    def test_dashboard_json(self, invoke, backend):
        backend.ok("dashboard", DASHBOARD_PAYLOAD)

        result = invoke("dashboard", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["currentWeight"] == 82.4
        assert data["error_kind"] is None


class TestShell:
    """Tests for the interactive shell."""

    def test_bad_date_returns_to_menu(self, invoke, backend):
        result = invoke("shell", stdin="weight\nnot-a-date\nquit\n")

        assert result.exit_code == 0
        assert "Invalid date 'not-a-date'" in result.output
        assert result.output.count("Página") == 2
        assert backend.requests == []

    def test_quit(self, invoke):
        result = invoke("shell", stdin="quit\n")
        assert result.exit_code == 0


class TestWeightCommands:
    """Tests for weight subcommands."""

    def test_add(self, invoke, backend):
        backend.ok("weight", {"id": "w1"})

        result = invoke("weight", "add", "75.5", "--date", "2024-01-01", "-b", "15.2")

        assert result.exit_code == 0
        assert "Peso registrado correctamente" in result.output
        assert backend.json_body()["data"] == {
            "date": "2024-01-01",
            "weight": 75.5,
            "bodyFat": 15.2,
        }

    def test_add_rejects_zero_weight(self, invoke, backend):
        result = invoke("weight", "add", "0")

        assert result.exit_code == 1
        assert "El peso debe ser mayor a 0" in result.output
        assert backend.requests == []

    def test_add_json(self, invoke, backend):
        backend.ok("weight", {"id": "w1"})

        result = invoke("weight", "add", "80", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["command"] == "weight add"
        assert data["data"] == {"id": "w1"}
        assert data["human_summary"] == "Logged 80.0 kg"

    def test_add_json_validation_error(self, invoke):
        result = invoke("weight", "add", "0", "--json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error_kind"] == "validation"
        assert data["errors"] == ["El peso debe ser mayor a 0"]

    def test_invalid_date(self, invoke, backend):
        result = invoke("weight", "add", "80", "--date", "01/02/2024")

        assert result.exit_code == 1
        assert "Invalid date" in result.output
        assert backend.requests == []

    def test_list(self, invoke, backend):
        backend.ok(
            "weight",
            [{"id": "w1", "date": "2024-01-01T00:00:00.000Z", "weight": 80.2}],
        )

        result = invoke("weight", "list")

        assert result.exit_code == 0
        assert "80.2" in result.output

    def test_list_backend_failure(self, invoke, backend):
        backend.fail("weight", "API key inválida")

        result = invoke("weight", "list")

        assert result.exit_code == 1
        assert "API key inválida" in result.output


class TestWorkoutCommands:
    """Tests for workouts subcommands."""

    def test_add_prints_one_rep_max(self, invoke, backend):
        backend.ok("workouts")

        result = invoke("workouts", "add", "Sentadilla", "80", "8", "--sets", "3")

        assert result.exit_code == 0
        assert "Entrenamiento registrado correctamente" in result.output
        assert "101 kg" in result.output
        assert backend.json_body()["data"]["sets"] == 3

    def test_one_rm_makes_no_request(self, invoke, backend):
        result = invoke("workouts", "one-rm", "100", "1")

        assert result.exit_code == 0
        assert "103 kg" in result.output
        assert backend.requests == []

    def test_one_rm_requires_positive_values(self, invoke):
        result = invoke("workouts", "one-rm", "0", "5")
        assert result.exit_code == 1

    def test_exercises(self, invoke):
        result = invoke("workouts", "exercises")
        assert result.exit_code == 0
        assert "Press de Banca" in result.output

    def test_list_by_exercise(self, invoke, backend):
        backend.ok("workouts/Peso Muerto", [])

        result = invoke("workouts", "list", "--exercise", "Peso Muerto")

        assert result.exit_code == 0
        assert backend.logical_path(backend.requests[0]) == "workouts/Peso Muerto"


class TestHabitCommands:
    """Tests for habits subcommands."""

    def test_log(self, invoke, backend):
        backend.ok("habits")

        result = invoke("habits", "log", "--sleep", "--water", "--date", "2024-01-01")

        assert result.exit_code == 0
        assert "2/3 hábitos - 67% completado" in result.output
        assert backend.json_body()["data"] == {
            "date": "2024-01-01",
            "sleep": True,
            "water": True,
            "cardio": False,
        }

    def test_compliance(self, invoke, backend):
        backend.ok("habits/compliance", 71.4)

        result = invoke("habits", "compliance")

        assert result.exit_code == 0
        assert "71%" in result.output


class TestPhotoCommands:
    """Tests for photos subcommands."""

    def test_upload_requires_existing_file(self, invoke, tmp_path):
        result = invoke("photos", "upload", str(tmp_path / "missing.jpg"))
        assert result.exit_code != 0

    def test_upload(self, invoke, backend, image_file):
        backend.route("image/upload", {"secure_url": "https://cdn/f.jpg"})
        backend.ok("photos", {"id": "p1"})
        backend.ok("photos/recent?limit=10", [])

        result = invoke("photos", "upload", str(image_file), "--description", "Frente")

        assert result.exit_code == 0
        assert "Foto de progreso guardada correctamente" in result.output
        assert backend.json_body(1)["data"]["url"] == "https://cdn/f.jpg"

    def test_list_uses_default_limit(self, invoke, backend):
        backend.ok("photos/recent?limit=10", [])

        result = invoke("photos", "list")

        assert result.exit_code == 0
        assert backend.logical_path(backend.requests[0]) == "photos/recent?limit=10"


class TestConfigCommands:
    """Tests for config subcommands."""

    def test_show_masks_api_key(self, invoke):
        result = invoke("config", "show")

        assert result.exit_code == 0
        assert BACKEND_URL in result.output
        assert API_KEY not in result.output

    def test_init_writes_file(self, tmp_path, monkeypatch, services):
        monkeypatch.delenv(settings_module.ENV_API_KEY, raising=False)
        path = tmp_path / "new" / "config.yaml"

        result = runner.invoke(
            app,
            ["--config", str(path), "config", "init", "--url", BACKEND_URL, "--api-key", "k"],
            obj=services,
        )

        assert result.exit_code == 0
        saved = Settings.load(path, environ={})
        assert saved.backend.url == BACKEND_URL
        assert saved.backend.api_key is None
