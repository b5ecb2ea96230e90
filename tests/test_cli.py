"""Tests for routegen.cli — CLI entrypoint and commands."""

import json
from pathlib import Path

import pytest

from routegen.cli import main


@pytest.fixture
def routes_file(tmp_path: Path, canonical_source: str) -> Path:
    path = tmp_path / "app.routes"
    path.write_text(canonical_source, encoding="utf-8")
    return path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_compile_missing_file_arg(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["compile"])
        assert exc_info.value.code == 2

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "routegen" in capsys.readouterr().out


class TestCompile:
    def test_prints_chain(self, routes_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compile", str(routes_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith('Route().at("/", get(get_index))')

    def test_writes_output(self, routes_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "out.py"
        assert main(["compile", str(routes_file), "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8").endswith('admin::build_routes())\n')

    def test_render_options(self, routes_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(
            [
                "compile",
                str(routes_file),
                "--layout",
                "multiline",
                "--router-factory",
                "Router()",
                "--method-namespace",
                "web",
            ]
        )
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "("
        assert lines[1].strip() == "Router()"
        assert lines[2].strip() == '.at("/", web.get(get_index))'

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compile", str(tmp_path / "nope.routes")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / "bad.routes"
        bad.write_text('{ "/" index ', encoding="utf-8")
        assert main(["compile", str(bad)]) == 1
        assert "Parse error at L1:" in capsys.readouterr().err

    def test_validation_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / "kw.routes"
        bad.write_text('{ "/" class::index GET }', encoding="utf-8")
        assert main(["compile", str(bad)]) == 1
        assert "Python keyword" in capsys.readouterr().err

    def test_duplicate_mounts_compile(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "dup.routes"
        path.write_text('{ *"/a" { a() } *"/a" { b() } }', encoding="utf-8")
        assert main(["compile", str(path)]) == 0
        assert capsys.readouterr().out == 'Route().nest("/a", a()).nest("/a", b())\n'

    def test_directory_path(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compile", str(tmp_path)]) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "latin.routes"
        path.write_bytes(b"\xff\xfe\x00")
        assert main(["compile", str(path)]) == 1
        assert "Cannot read" in capsys.readouterr().err


class TestExpand:
    def test_default_output_drops_suffix(self, tmp_path: Path) -> None:
        template = tmp_path / "routes.py.in"
        template.write_text('r = define_routes!({ "/" index GET })\n', encoding="utf-8")

        assert main(["expand", str(template)]) == 0
        expanded = tmp_path / "routes.py"
        assert expanded.read_text(encoding="utf-8") == 'r = Route().at("/", get(get_index))\n'

    def test_suffixless_template_gets_py(self, tmp_path: Path) -> None:
        template = tmp_path / "routes"
        template.write_text("r = define_routes!({})\n", encoding="utf-8")

        assert main(["expand", str(template)]) == 0
        assert (tmp_path / "routes.py").read_text(encoding="utf-8") == "r = Route()\n"

    def test_explicit_output(self, tmp_path: Path) -> None:
        template = tmp_path / "t.tmpl"
        target = tmp_path / "gen" / "out.py"
        target.parent.mkdir()
        template.write_text("r = define_routes!({})\n", encoding="utf-8")

        assert main(["expand", str(template), "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == "r = Route()\n"

    def test_refuses_to_overwrite_template(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        template = tmp_path / "routes.py"
        text = 'r = define_routes!({ "/" index GET })\n'
        template.write_text(text, encoding="utf-8")

        assert main(["expand", str(template)]) == 1
        assert "would overwrite" in capsys.readouterr().err
        assert template.read_text(encoding="utf-8") == text

    def test_explicit_output_same_as_template(self, tmp_path: Path) -> None:
        template = tmp_path / "routes.tmpl"
        template.write_text("r = define_routes!({})\n", encoding="utf-8")

        assert main(["expand", str(template), "-o", str(template)]) == 1
        assert template.read_text(encoding="utf-8") == "r = define_routes!({})\n"


class TestCheck:
    def test_clean(self, routes_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["check", str(routes_file)]) == 0
        assert "OK: 4 route entries" in capsys.readouterr().out

    def test_warnings_do_not_fail(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "w.routes"
        path.write_text('{ "about" about GET }', encoding="utf-8")
        assert main(["check", str(path)]) == 0
        assert "[warning] line 1" in capsys.readouterr().out

    def test_errors_fail(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "e.routes"
        path.write_text('{ "/" class::index GET }', encoding="utf-8")
        assert main(["check", str(path)]) == 1
        assert "[error]" in capsys.readouterr().err


class TestShowAndParse:
    def test_show_lists_handlers(
        self,
        routes_file: Path,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("COLUMNS", "200")
        assert main(["show", str(routes_file)]) == 0
        out = capsys.readouterr().out
        assert "/pastes/:id" in out
        assert "paste.post_paste" in out

    def test_parse_dumps_json(self, routes_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["parse", str(routes_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [e["kind"] for e in data["entries"]] == ["normal", "normal", "normal", "nested"]

    def test_parse_writes_output(self, routes_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "table.json"
        assert main(["parse", str(routes_file), "-o", str(target)]) == 0
        assert json.loads(target.read_text(encoding="utf-8"))["base"] is None
