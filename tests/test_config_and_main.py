import io
import json
import os
import sys
import tempfile
import unittest
from unittest import mock


sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))


from gnc.config import BlockConfig, config_from_mapping, load_config  # noqa: E402
from gnc.errors import ConfigError  # noqa: E402
from gnc.http_utils import HttpResponse  # noqa: E402
from gnc.main import main  # noqa: E402


def _write_config(td: str, cfg: object) -> str:
    path = os.path.join(td, "config.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False)
    return path


class TestConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = config_from_mapping({})
        self.assertEqual(cfg, BlockConfig())
        self.assertEqual(cfg.interval_seconds, 30.0)
        self.assertEqual(cfg.api_server, "https://api.github.com")
        self.assertEqual(cfg.format, "{total}")
        self.assertEqual(cfg.timeout_seconds, 5.0)

    def test_load_config_nested_github_object(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(
                td,
                {"github": {"interval": 60, "api_server": "https://ghe.example/api/v3", "format": "{total}/{mention}"}},
            )
            cfg = load_config(path)
        self.assertEqual(cfg.interval_seconds, 60.0)
        self.assertEqual(cfg.api_server, "https://ghe.example/api/v3")
        self.assertEqual(cfg.format, "{total}/{mention}")

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            config_from_mapping({"interval": 30, "colour": "red"})

    def test_bad_values_are_rejected(self) -> None:
        bad = (
            {"interval": 0},
            {"interval": "30"},
            {"interval": True},
            {"format": ""},
            {"timeout": -1},
            {"api_server": "api.github.com"},
            {"api_server": "ftp://ghe.example"},
            {"api_server": "https://api.github.com/\u00e9"},
        )
        for raw in bad:
            with self.subTest(raw=raw):
                with self.assertRaises(ConfigError):
                    config_from_mapping(raw)

    def test_unreadable_config_is_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "config.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_resolve_token(self) -> None:
        cfg = BlockConfig()
        self.assertEqual(cfg.resolve_token({"GITHUB_TOKEN": "t"}), "t")
        self.assertIsNone(cfg.resolve_token({"GITHUB_TOKEN": ""}))
        self.assertIsNone(cfg.resolve_token({}))


    def test_block_config_rejects_api_server_without_scheme(self) -> None:
        with self.assertRaises(ConfigError):
            BlockConfig(api_server="api.github.com")
        self.assertEqual(BlockConfig(api_server="https://ghe.example/api/v3").api_server, "https://ghe.example/api/v3")

class TestMain(unittest.TestCase):
    def test_missing_token_exits_with_config_error(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with mock.patch("gnc.http_utils.HttpClient.get") as get:
                code = main(["--once"], out=io.StringIO())
        self.assertEqual(code, 2)
        get.assert_not_called()

    def test_once_prints_block_json(self) -> None:
        resp = HttpResponse(
            status=200,
            url="https://api.github.com/notifications",
            headers={},
            body=b'[{"reason": "mention"}, {"reason": "author"}]',
        )
        out = io.StringIO()
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td, {"format": "{total}:{mention}"})
            with mock.patch.dict(os.environ, {"GITHUB_TOKEN": "t"}, clear=True):
                with mock.patch("gnc.http_utils.HttpClient.get", return_value=resp):
                    code = main(["--config", path, "--once"], out=out)

        self.assertEqual(code, 0)
        line = json.loads(out.getvalue().strip())
        self.assertEqual(line["name"], "github")
        self.assertTrue(line["full_text"].endswith(" 2:1 "))

    def test_once_failure_prints_sentinel(self) -> None:
        out = io.StringIO()
        with mock.patch.dict(os.environ, {"GITHUB_TOKEN": "t"}, clear=True):
            with mock.patch("gnc.http_utils.HttpClient.get", side_effect=TimeoutError("timed out")):
                code = main([], out=out)

        self.assertEqual(code, 0)
        self.assertTrue(json.loads(out.getvalue().strip())["full_text"].endswith(" N/A "))

