from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from src.app.domain.errors import CatalogCorruptedError, CatalogWriteError
from src.app.domain.models import Category, Project
from src.app.infra.db import json_catalog_repo
from src.app.infra.db.json_catalog_repo import JsonFileCatalogRepository
from src.app.infra.db.memory_catalog_repo import InMemoryCatalogRepository


def _sample_projects() -> list[Project]:
    return [
        Project(
            id="premier-watchdog",
            title="Premier Watchdog",
            category=Category.BRAND_PROTECTION,
            description="IP brand protection platform.",
            image="/app_portfolio/watchdog.png",
            tags=["Go", "Next.js", "Go"],
        ),
        Project(
            id="screensense",
            title="ScreenSense Video Analyzer",
            category=Category.VIDEO_ANALYSIS,
            tags=[],
            link="https://screensense.example.com",
        ),
        Project(
            id="simtrain-ai-call",
            title="AI-Powered Customer Simulator – ação",
            category=Category.AI,
            github="https://github.com/example/simtrain",
        ),
    ]


def _leftover_temp_files(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if p.name.endswith(".tmp")]


class TestJsonFileCatalogRepositoryLoad:
    def test_missing_file_is_empty_collection(self, tmp_path: Path) -> None:
        repo = JsonFileCatalogRepository(tmp_path / "missing" / "projects.json")

        assert repo.load_all() == []

    def test_blank_file_is_empty_collection(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text("  \n", encoding="utf-8")

        assert JsonFileCatalogRepository(path).load_all() == []

    def test_invalid_json_is_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text('[{"id": "a",', encoding="utf-8")

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert exc_info.value.path == str(path)

    def test_non_array_document_is_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text('{"projects": []}', encoding="utf-8")

        with pytest.raises(CatalogCorruptedError):
            JsonFileCatalogRepository(path).load_all()

    def test_invalid_entry_is_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text('[{"id": "a", "title": "A", "category": "Games"}]', encoding="utf-8")

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert "entry 0" in exc_info.value.reason

    def test_reads_document_written_by_hand(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text(
            json.dumps([{"id": "ai-chatbot", "title": "AI Chatbot", "description": "d",
                         "image": "/a.png", "tags": ["React"], "category": "AI"}]),
            encoding="utf-8",
        )

        projects = JsonFileCatalogRepository(path).load_all()

        assert [p.id for p in projects] == ["ai-chatbot"]
        assert projects[0].tags == ["React"]


class TestJsonFileCatalogRepositorySave:
    def test_round_trip_preserves_content_and_order(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        original = _sample_projects()

        JsonFileCatalogRepository(path).save_all(original)
        reloaded = JsonFileCatalogRepository(path).load_all()

        assert reloaded == original

    def test_document_is_plain_array_of_records(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"

        JsonFileCatalogRepository(path).save_all(_sample_projects())
        payload = json.loads(path.read_text(encoding="utf-8"))

        assert isinstance(payload, list)
        assert payload[0]["category"] == "Brand Protection"
        assert "link" not in payload[0]
        assert payload[1]["link"] == "https://screensense.example.com"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "nested" / "projects.json"

        JsonFileCatalogRepository(path).save_all([])

        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_no_temp_files_left_after_success(self, tmp_path: Path) -> None:
        JsonFileCatalogRepository(tmp_path / "projects.json").save_all(_sample_projects())

        assert _leftover_temp_files(tmp_path) == []


class TestJsonFileCatalogRepositoryFaults:
    def _seed(self, tmp_path: Path) -> tuple[Path, str]:
        path = tmp_path / "projects.json"
        JsonFileCatalogRepository(path).save_all(_sample_projects()[:1])
        return path, path.read_text(encoding="utf-8")

    def test_failure_during_serialization_keeps_previous_document(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path, before = self._seed(tmp_path)

        def partial_dump(obj, handle, **kwargs):
            handle.write('[{"id": "half-writ')
            raise OSError("disk full")

        monkeypatch.setattr(json_catalog_repo.json, "dump", partial_dump)

        with pytest.raises(CatalogWriteError):
            JsonFileCatalogRepository(path).save_all(_sample_projects())

        monkeypatch.undo()
        assert path.read_text(encoding="utf-8") == before
        assert len(JsonFileCatalogRepository(path).load_all()) == 1
        assert _leftover_temp_files(tmp_path) == []

    def test_failure_during_fsync_keeps_previous_document(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path, before = self._seed(tmp_path)

        def failing_fsync(fd: int) -> None:
            raise OSError("I/O error")

        monkeypatch.setattr(json_catalog_repo.os, "fsync", failing_fsync)

        with pytest.raises(CatalogWriteError):
            JsonFileCatalogRepository(path).save_all(_sample_projects())

        monkeypatch.undo()
        assert path.read_text(encoding="utf-8") == before
        assert _leftover_temp_files(tmp_path) == []

    def test_failure_during_rename_keeps_previous_document(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path, before = self._seed(tmp_path)

        def failing_replace(self, target):
            raise OSError("rename interrupted")

        monkeypatch.setattr(json_catalog_repo.Path, "replace", failing_replace)

        with pytest.raises(CatalogWriteError) as exc_info:
            JsonFileCatalogRepository(path).save_all(_sample_projects())

        monkeypatch.undo()
        assert "rename interrupted" in exc_info.value.reason
        assert path.read_text(encoding="utf-8") == before
        assert _leftover_temp_files(tmp_path) == []

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_read_only_directory_raises_write_error(self, tmp_path: Path) -> None:
        path, before = self._seed(tmp_path)
        tmp_path.chmod(0o500)
        try:
            with pytest.raises(CatalogWriteError):
                JsonFileCatalogRepository(path).save_all([])
        finally:
            tmp_path.chmod(0o700)

        assert path.read_text(encoding="utf-8") == before


class TestInMemoryCatalogRepository:
    def test_starts_empty(self) -> None:
        assert InMemoryCatalogRepository().load_all() == []

    def test_save_then_load(self) -> None:
        repo = InMemoryCatalogRepository()
        projects = _sample_projects()

        repo.save_all(projects)

        assert repo.load_all() == projects
        assert repo.save_count == 1

    def test_returned_lists_are_copies(self) -> None:
        repo = InMemoryCatalogRepository(_sample_projects())

        loaded = repo.load_all()
        loaded[0].tags.append("mutated")
        loaded.pop()

        assert len(repo.load_all()) == 3
        assert "mutated" not in repo.load_all()[0].tags


class TestJsonFileCatalogRepositoryEntryShape:
    def _write(self, tmp_path: Path, entries: list) -> Path:
        path = tmp_path / "projects.json"
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path

    def test_non_string_title_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": "a", "title": {"en": "Alpha"}, "category": "AI"}])

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert "title" in exc_info.value.reason

    def test_non_string_tag_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": "a", "title": "A", "tags": ["x", 1], "category": "AI"}])

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert "tags" in exc_info.value.reason

    def test_boolean_description_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": "a", "title": "A", "description": False, "category": "AI"}])

        with pytest.raises(CatalogCorruptedError):
            JsonFileCatalogRepository(path).load_all()

    def test_non_string_link_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": "a", "title": "A", "category": "AI", "link": 123}])

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert "link" in exc_info.value.reason

    def test_numeric_id_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": 7, "title": "A", "category": "AI"}])

        with pytest.raises(CatalogCorruptedError):
            JsonFileCatalogRepository(path).load_all()

    def test_repeated_id_is_corrupt(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [
            {"id": "a", "title": "A", "category": "AI"},
            {"id": "a", "title": "A again", "category": "SaaS"},
        ])

        with pytest.raises(CatalogCorruptedError) as exc_info:
            JsonFileCatalogRepository(path).load_all()

        assert "entry 1" in exc_info.value.reason

    def test_null_links_are_absent(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, [{"id": "a", "title": "A", "category": "AI", "link": None}])

        assert JsonFileCatalogRepository(path).load_all()[0].link is None
