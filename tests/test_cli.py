"""Tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from rag_example import cli
from rag_example.core.config import Settings
from rag_example.core.errors import GenerationUnavailable, RetrievalUnavailable
from rag_example.prompts.template import PromptTemplate
from rag_example.query.rag_service import RAGService

@pytest.fixture(autouse=True)
def cli_settings(settings):
    with patch.object(cli, "get_settings", return_value=settings), \
         patch.object(cli, "configure_logging"):
        yield settings

@pytest.fixture
def mock_rag_service():
    service = MagicMock()
    service.answer.return_value = "Forty-two."
    with patch.object(cli, "build_rag_service", return_value=service):
        yield service

def test_q_prints_answer(mock_rag_service, capsys):
    assert cli.main(["q", "What is the answer?"]) == 0

    mock_rag_service.answer.assert_called_once_with("What is the answer?")
    assert capsys.readouterr().out == "Forty-two.\n"

def test_q_uses_default_question(mock_rag_service, cli_settings):
    assert cli.main(["q"]) == 0
    mock_rag_service.answer.assert_called_once_with(cli_settings.default_question)

@pytest.mark.parametrize("error", [RetrievalUnavailable("chroma down"), GenerationUnavailable("ollama down")])
def test_q_reports_adapter_failure(mock_rag_service, capsys, error):
    mock_rag_service.answer.side_effect = error

    assert cli.main(["q", "hi"]) == 1

    err = capsys.readouterr().err
    assert error.label in err
    assert str(error) in err

def test_load_adds_one_document_per_file(tmp_path, capsys):
    first = tmp_path / "first.txt"
    first.write_text("Alpha text", encoding="utf-8")
    second = tmp_path / "second.txt"
    second.write_text("Beta text", encoding="utf-8")
    store = MagicMock()
    store.add_texts.side_effect = lambda texts, metadatas, ids: ids

    with patch.object(cli, "get_vector_store", return_value=store), \
         patch.object(cli, "get_embedding_service"):
        assert cli.main(["load", str(first), str(second)]) == 0

    store.add_texts.assert_called_once_with(
        ["Alpha text", "Beta text"],
        metadatas=[{"source": "first.txt"}, {"source": "second.txt"}],
        ids=[str(first.resolve()), str(second.resolve())],
    )
    assert "Loaded 2 documents." in capsys.readouterr().out

def test_load_missing_file_fails(tmp_path, capsys):
    with patch.object(cli, "get_vector_store") as mock_store, \
         patch.object(cli, "get_embedding_service"):
        assert cli.main(["load", str(tmp_path / "nope.txt")]) == 1
    mock_store.assert_not_called()
    assert "FileNotFoundError" in capsys.readouterr().err

def test_serve_runs_uvicorn(cli_settings):
    with patch("rag_example.main.run") as mock_run:
        assert cli.main(["serve"]) == 0
    mock_run.assert_called_once_with(cli_settings)

def test_reloading_a_file_keeps_its_id(tmp_path, cli_settings):
    a = tmp_path / "a.txt"
    a.write_text("Alpha", encoding="utf-8")
    b = tmp_path / "b.txt"
    b.write_text("Beta", encoding="utf-8")
    store = MagicMock()
    store.add_texts.side_effect = lambda texts, metadatas, ids: ids

    with patch.object(cli, "get_vector_store", return_value=store), \
         patch.object(cli, "get_embedding_service"):
        first_ids = cli.load_documents([a], cli_settings)
        second_ids = cli.load_documents([b, a, a], cli_settings)

    assert second_ids == [str(b.resolve()), first_ids[0]]
    assert store.add_texts.call_args.args[0] == ["Beta", "Alpha"]

def test_unknown_embedding_provider_reports_error(capsys):
    settings = Settings(embedding_provider="word2vec", _env_file=None)
    with patch.object(cli, "get_settings", return_value=settings):
        assert cli.main(["q", "hi"]) == 1
    assert "error [ValueError]: Unknown embedding provider" in capsys.readouterr().err

def test_unfilled_template_placeholder_reports_error(tmp_path, capsys, mock_vector_store):
    template = tmp_path / "custom.st"
    template.write_text("{input} {documents} {tone}", encoding="utf-8")
    llm = MagicMock()
    service = RAGService(mock_vector_store, llm, PromptTemplate.from_file(template))

    with patch.object(cli, "build_rag_service", return_value=service):
        assert cli.main(["q", "hi"]) == 1
    assert "error [ValueError]: Missing values for prompt placeholders: tone" in capsys.readouterr().err
    llm.complete.assert_not_called()
