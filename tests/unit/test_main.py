import json
from pathlib import Path
from unittest.mock import patch

import pytest

from cadquote.main import main
from cadquote.processor.processor import build_pipeline


class TestMain:
    def test_missing_file_exits_with_error(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "nope.stl")]) == 1

    def test_rejected_batch_exits_with_error(self, tmp_path: Path) -> None:
        path = tmp_path / "model.xyz"
        path.write_bytes(b"data")
        assert main([str(path)]) == 1

    def test_prints_quote_json(
        self, tmp_path: Path, sleep, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        monkeypatch.setenv("RANDOM_SEED", "3")
        path = tmp_path / "bracket.step"
        path.write_bytes(b"x" * 2048)

        def fast_pipeline(settings):
            return build_pipeline(settings, sleep=sleep)

        with patch("cadquote.main.build_pipeline", side_effect=fast_pipeline):
            exit_code = main([str(path)])

        assert exit_code == 0
        output = capsys.readouterr().out
        payload = json.loads(output[output.index("{") :])
        assert payload["id"].startswith("QT-")
        assert payload["analysis"]["summary"]["total_files"] == 1
        assert payload["analysis"]["files"][0]["name"] == "bracket.step"
