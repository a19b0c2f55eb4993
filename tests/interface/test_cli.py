import pytest

from aid_bot.application.use_cases.index_corpus import IndexCorpus
from aid_bot.infrastructure.parsing.text_loaders import PlainTextLoaderAdapter
from aid_bot.interface.cli import main as cli


def test_parser_subcommands():
    parser = cli.build_parser()

    args = parser.parse_args(["ask", "--content", "help", "--language", "es"])
    assert args.func is cli.cmd_ask
    assert (args.content, args.language) == ("help", "es")

    args = parser.parse_args(["serve", "--port", "8080"])
    assert args.port == 8080 and args.host is None

    assert parser.parse_args(["index"]).corpus is None
    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_languages_lists_catalog(capsys):
    assert cli.main(["languages"]) == 0
    out = capsys.readouterr().out
    assert "es\tSpanish" in out
    assert "auto" not in out.split()


def test_ask_prints_response(monkeypatch, capsys, container):
    monkeypatch.setattr(cli, "build_container", lambda settings: container)

    assert cli.main(["ask", "--content", "I need shelter", "--language", "es"]) == 0
    assert "Spanish: Vaya al refugio" in capsys.readouterr().out


def test_ask_prints_error(monkeypatch, capsys, container):
    monkeypatch.setattr(cli, "build_container", lambda settings: container)

    assert cli.main(["ask", "--content", "help", "--language", "xx"]) == 1
    assert "[ERROR] InvalidLanguageError: Invalid language" in capsys.readouterr().out


def test_index_reports_counts(monkeypatch, capsys, tmp_path, fakes):
    (tmp_path / "water.txt").write_text("Boil water.", encoding="utf-8")
    (tmp_path / "empty.txt").write_text("", encoding="utf-8")

    class _Embedding:
        def embed_texts(self, texts):
            return [[1.0, 0.0] for _ in texts]

        def embed_query(self, text):
            return [1.0, 0.0]

    def fake_use_case(settings):
        return IndexCorpus({".txt": PlainTextLoaderAdapter()}, _Embedding(), fakes.store)

    monkeypatch.setattr(cli, "build_index_use_case", fake_use_case)

    assert cli.main(["index", "--corpus", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "✓ Indexed 1 documents into 1 chunks" in out
    assert "skipped empty document: empty.txt" in out


def test_index_missing_corpus(capsys, tmp_path):
    assert cli.main(["index", "--corpus", str(tmp_path / "missing")]) == 1
    assert "✗ CorpusError" in capsys.readouterr().out
