"""Tests for the HTTP surface."""

from pathlib import Path

import pytest


class TestFilterRoutes:
    def test_health(self, test_client) -> None:
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_profiles(self, test_client) -> None:
        data = test_client.get("/profiles").json()
        assert data["active"] == "default"
        assert "passthrough" in data["profiles"]

    def test_filter_text(self, test_client) -> None:
        response = test_client.post(
            "/filter",
            json={"text": "Hellow, World!", "profile": "passthrough", "min_word_length": 6},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Hellow, !"
        assert data["run_id"].startswith("run_")
        assert data["processing_time_ms"] >= 0
        assert data["statistics"]["total_words"] == 2
        assert data["statistics"]["filtered_words"] == 1

    def test_filter_text_with_punctuation_and_workers(self, test_client) -> None:
        response = test_client.post(
            "/filter",
            json={
                "text": "Hellow, World!",
                "profile": "passthrough",
                "min_word_length": 6,
                "remove_punctuation": True,
                "worker_count": 4,
            },
        )
        assert response.status_code == 200
        assert response.json()["text"] == "Hellow "

    def test_statistics_disabled(self, test_client) -> None:
        response = test_client.post(
            "/filter",
            json={"text": "a bb ccc", "min_word_length": 2, "collect_statistics": False},
        )
        assert response.status_code == 200
        assert response.json()["statistics"] is None

    def test_unknown_profile(self, test_client) -> None:
        response = test_client.post("/filter", json={"text": "x", "profile": "missing"})
        assert response.status_code == 400

    def test_negative_min_length_rejected(self, test_client) -> None:
        response = test_client.post("/filter", json={"text": "x", "min_word_length": -1})
        assert response.status_code == 400
        assert "min_word_length" in response.json()["detail"]

    @pytest.mark.parametrize(
        "override", [{"worker_count": 0}, {"chunk_size": 0}, {"max_word_size": 0}]
    )
    def test_out_of_range_overrides_are_bad_requests(self, test_client, override) -> None:
        response = test_client.post("/filter", json={"text": "x", **override})
        assert response.status_code == 400

    def test_worker_cap(self, test_client) -> None:
        response = test_client.post("/filter", json={"text": "x", "worker_count": 1000})
        assert response.status_code == 400

    def test_word_too_large(self, test_client) -> None:
        response = test_client.post("/filter", json={"text": "a" * 30, "max_word_size": 10})
        assert response.status_code == 422
        assert "max_word_size=10" in response.json()["detail"]


class TestFilterFileRoute:
    def test_filter_file(self, test_client, data_dir: Path) -> None:
        (data_dir / "in.txt").write_bytes(b"one three five seven\nsix\n")
        response = test_client.post(
            "/filter/file",
            json={
                "input_path": "in.txt",
                "output_path": "out/../out.txt",
                "profile": "passthrough",
                "min_word_length": 4,
                "worker_count": 2,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["output_path"] == "out/../out.txt"
        assert data["statistics"]["total_lines"] == 2
        assert (data_dir / "out.txt").read_text(encoding="utf-8") == " three five seven\n\n"

    def test_absolute_path_inside_data_dir(self, test_client, data_dir: Path) -> None:
        src = data_dir / "in.txt"
        src.write_bytes(b"a bb ccc")
        response = test_client.post(
            "/filter/file",
            json={"input_path": str(src), "output_path": str(data_dir / "out.txt"), "min_word_length": 2},
        )
        assert response.status_code == 200
        assert (data_dir / "out.txt").read_bytes() == b" bb ccc"

    @pytest.mark.parametrize("target", ["relative", "absolute"])
    def test_output_outside_data_dir_rejected(self, test_client, data_dir: Path, target: str) -> None:
        (data_dir / "in.txt").write_bytes(b"alpha beta")
        victim = data_dir.parent / "elsewhere" / "important.cfg"
        victim.parent.mkdir()
        victim.write_bytes(b"ORIGINAL")
        output_path = "../elsewhere/important.cfg" if target == "relative" else str(victim)
        response = test_client.post("/filter/file", json={"input_path": "in.txt", "output_path": output_path})
        assert response.status_code == 400
        assert "outside the data directory" in response.json()["detail"]
        assert victim.read_bytes() == b"ORIGINAL"

    def test_input_outside_data_dir_rejected(self, test_client, data_dir: Path) -> None:
        secret = data_dir.parent / "secret.txt"
        secret.write_bytes(b"top secret words")
        response = test_client.post(
            "/filter/file", json={"input_path": "../secret.txt", "output_path": "leak.txt"}
        )
        assert response.status_code == 400
        assert not (data_dir / "leak.txt").exists()

    def test_symlink_escape_rejected(self, test_client, data_dir: Path) -> None:
        victim = data_dir.parent / "important.cfg"
        victim.write_bytes(b"ORIGINAL")
        (data_dir / "in.txt").write_bytes(b"alpha beta")
        (data_dir / "link.cfg").symlink_to(victim)
        response = test_client.post("/filter/file", json={"input_path": "in.txt", "output_path": "link.cfg"})
        assert response.status_code == 400
        assert victim.read_bytes() == b"ORIGINAL"

    def test_same_path(self, test_client, data_dir: Path) -> None:
        src = data_dir / "in.txt"
        src.write_bytes(b"abc")
        response = test_client.post(
            "/filter/file", json={"input_path": "in.txt", "output_path": "./in.txt"}
        )
        assert response.status_code == 400
        assert src.read_text(encoding="utf-8") == "abc"

    def test_missing_input(self, test_client, data_dir: Path) -> None:
        response = test_client.post(
            "/filter/file",
            json={"input_path": "missing.txt", "output_path": "out.txt"},
        )
        assert response.status_code == 500
        assert "missing.txt" not in response.json()["detail"]
