"""
Unit Tests for the emergency-mind CLI

Runs main() with an injected service so no environment or disk is touched,
except where the file backend is exercised through --storage-dir.
"""

import json
import sys
from unittest.mock import patch

import pytest
from loguru import logger

from emergency_mind import cli
from emergency_mind.core.exceptions import StorageQuotaExceededError


NOTE_ARGS = ["--note", "Patient presents with chest pain", "--note", "BP 140/90"]


def run(service, *argv):
    return cli.main(list(argv), service=service)


# ---------------------------------------------------------------------------
# ARGUMENT PARSING
# ---------------------------------------------------------------------------


class TestArgumentParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.create_argument_parser().parse_args([])

    def test_notes_accumulate(self):
        args = cli.create_argument_parser().parse_args(
            ["generate", "--specialty", "icu", "--service", "consultation", *NOTE_ARGS]
        )
        assert args.notes == ["Patient presents with chest pain", "BP 140/90"]
        assert args.save is False


# ---------------------------------------------------------------------------
# COMMANDS
# ---------------------------------------------------------------------------


class TestServicesCommand:
    def test_lists_specialties(self, service, capsys):
        assert run(service, "services") == cli.EXIT_OK
        assert "Emergency Medicine" in capsys.readouterr().out

    def test_lists_services_for_specialty(self, service, capsys):
        assert run(service, "services", "clinic-doctor") == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "icd-10-finder" in out
        assert "(unavailable)" not in out

    def test_unknown_specialty(self, service, capsys):
        assert run(service, "services", "dermatology") == cli.EXIT_OK
        assert "No services" in capsys.readouterr().out


class TestGenerateCommand:
    def test_prints_document(self, service, capsys):
        code = run(service, "generate", "--specialty", "emergency", "--service", "final-report", *NOTE_ARGS)

        assert code == cli.EXIT_OK
        assert capsys.readouterr().out.startswith("FINAL MEDICAL REPORT")
        assert service.store.get_all() == []

    def test_save_flag_persists(self, service, capsys):
        code = run(
            service, "generate", "--specialty", "emergency", "--service", "final-report", *NOTE_ARGS, "--save"
        )

        assert code == cli.EXIT_OK
        assert "Saved report report-1" in capsys.readouterr().out
        assert len(service.store.get_all()) == 1

    def test_json_output(self, service, capsys):
        run(service, "generate", "--specialty", "icu", "--service", "consultation", "--note", "x", "--json")
        payload = json.loads(capsys.readouterr().out)
        assert payload["service"] == "consultation"

    def test_unknown_service_exit_code(self, service, capsys):
        code = run(service, "generate", "--specialty", "emergency", "--service", "bogus", "--note", "x")

        assert code == cli.EXIT_INVALID
        assert "Invalid service" in capsys.readouterr().err

    def test_no_notes_exit_code(self, service):
        code = run(service, "generate", "--specialty", "emergency", "--service", "final-report")
        assert code == cli.EXIT_INVALID

    def test_persistence_error_exit_code(self, service):
        with patch.object(
            service.store, "save", side_effect=StorageQuotaExceededError("k", 10, 20)
        ):
            code = run(
                service, "generate", "--specialty", "icu", "--service", "consultation", "--note", "x", "--save"
            )
        assert code == cli.EXIT_PERSISTENCE


class TestHistoryCommands:
    @pytest.fixture
    def saved(self, service):
        service.generate_and_save("emergency", "final-report", ["Chest pain"])
        service.generate_and_save("icu", "consultation", ["Sepsis suspected"])
        return service

    def test_history_lists_reports(self, saved, capsys):
        assert run(saved, "history") == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "report-1" in out and "report-2" in out
        assert "2 report(s)" in out

    def test_history_search(self, saved, capsys):
        run(saved, "history", "--search", "sepsis")
        out = capsys.readouterr().out
        assert "report-2" in out
        assert "report-1" not in out

    def test_history_empty(self, service, capsys):
        run(service, "history")
        assert "No reports found" in capsys.readouterr().out

    def test_show(self, saved, capsys):
        assert run(saved, "show", "report-1") == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "Final Medical Report" in out
        assert "- Chest pain" in out

    def test_show_json(self, saved, capsys):
        run(saved, "show", "report-2", "--json")
        assert json.loads(capsys.readouterr().out)["notes"] == ["Sepsis suspected"]

    def test_show_missing(self, saved):
        assert run(saved, "show", "nope") == cli.EXIT_NOT_FOUND

    def test_delete(self, saved):
        assert run(saved, "delete", "report-1") == cli.EXIT_OK
        assert run(saved, "delete", "report-1") == cli.EXIT_NOT_FOUND
        assert len(saved.store.get_all()) == 1

    def test_clear(self, saved, capsys):
        assert run(saved, "clear") == cli.EXIT_OK
        assert "Cleared 2 report(s)" in capsys.readouterr().out
        assert saved.store.get_all() == []

    def test_stats(self, saved, capsys):
        assert run(saved, "stats") == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "Reports:     2" in out
        assert "emergency, icu" in out


# ---------------------------------------------------------------------------
# SERVICE CONSTRUCTION
# ---------------------------------------------------------------------------


class TestBuildService:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_storage_dir_persists_between_invocations(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv("EM_STORAGE_BACKEND", raising=False)
        storage_dir = str(tmp_path / "reports")

        code = cli.main(
            ["--storage-dir", storage_dir, "generate", "--specialty", "icu",
             "--service", "consultation", "--note", "x", "--save"]
        )
        assert code == cli.EXIT_OK

        capsys.readouterr()
        assert cli.main(["--storage-dir", storage_dir, "stats"]) == cli.EXIT_OK
        assert "Reports:     1" in capsys.readouterr().out

    def test_invalid_configuration_exit_code(self, monkeypatch):
        monkeypatch.setenv("EM_STORAGE_BACKEND", "cloud")
        assert cli.main(["stats"]) == cli.EXIT_INVALID
