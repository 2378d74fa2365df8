"""Unit tests for the ChromaDB vector store adapter."""

import hashlib
import random
from unittest.mock import MagicMock, patch

import pytest

from rag_example.core.errors import RetrievalUnavailable
from rag_example.interfaces.embedding_interface import EmbeddingInterface
from rag_example.models import Document
from rag_example.vector_stores.chroma_store import ChromaStore

def _query_result(ids, documents, distances, metadatas=None):
    return {
        "ids": [ids],
        "documents": [documents],
        "metadatas": [metadatas if metadatas is not None else [{"source": f"{i}.txt"} for i in ids]],
        "distances": [distances],
    }

@pytest.fixture
def mock_embedding_service():
    service = MagicMock(spec=EmbeddingInterface)
    service.embed_query.return_value = [0.1, 0.2, 0.3]
    service.embed_documents.side_effect = lambda texts: [[float(len(t)), 0.0, 1.0] for t in texts]
    return service

@pytest.fixture
def mock_collection():
    return MagicMock()

@pytest.fixture
def chroma_store(settings, mock_embedding_service, mock_collection):
    client = MagicMock()
    client.get_or_create_collection.return_value = mock_collection
    return ChromaStore(settings=settings, embedding_service=mock_embedding_service, client=client)

def test_collection_created_with_cosine_space(settings, mock_embedding_service):
    client = MagicMock()
    ChromaStore(settings=settings, embedding_service=mock_embedding_service, client=client)
    client.get_or_create_collection.assert_called_once_with(
        settings.vector_collection_name, metadata={"hnsw:space": "cosine"}
    )

def test_persistent_client_failure_raises_retrieval_unavailable(settings, mock_embedding_service):
    with patch("rag_example.vector_stores.chroma_store.chromadb.PersistentClient", side_effect=RuntimeError("disk")):
        with pytest.raises(RetrievalUnavailable):
            ChromaStore(settings=settings, embedding_service=mock_embedding_service)

def test_search_returns_documents_with_scores(chroma_store, mock_collection, mock_embedding_service):
    mock_collection.query.return_value = _query_result(["a", "b"], ["Alpha", "Beta"], [0.1, 0.4])

    documents = chroma_store.search("greek letters", top_k=3)

    assert [doc.content for doc in documents] == ["Alpha", "Beta"]
    assert documents[0].score == pytest.approx(0.9)
    assert documents[1].score == pytest.approx(0.6)
    assert documents[0].metadata == {"source": "a.txt"}
    mock_embedding_service.embed_query.assert_called_once_with("greek letters")
    mock_collection.query.assert_called_once_with(
        query_embeddings=[[0.1, 0.2, 0.3]],
        n_results=3,
        include=["metadatas", "documents", "distances"],
    )

def test_search_orders_by_descending_score_and_truncates(chroma_store, mock_collection):
    mock_collection.query.return_value = _query_result(["a", "b", "c"], ["A", "B", "C"], [0.5, 0.1, 0.3])

    documents = chroma_store.search("q", top_k=2)

    assert [doc.id for doc in documents] == ["b", "c"]

@pytest.mark.parametrize("top_k", [1, 2, 3, 5, 8])
def test_search_respects_top_k_and_ordering(chroma_store, mock_collection, top_k):
    rng = random.Random(top_k)
    ids = [f"doc{i}" for i in range(6)]
    distances = [rng.random() for _ in ids]
    mock_collection.query.return_value = _query_result(ids, [f"text {i}" for i in ids], distances)

    documents = chroma_store.search("q", top_k=top_k)

    assert len(documents) <= top_k
    scores = [doc.score for doc in documents]
    assert scores == sorted(scores, reverse=True)

def test_search_empty_result(chroma_store, mock_collection):
    mock_collection.query.return_value = _query_result([], [], [])
    assert chroma_store.search("nothing", top_k=3) == []

def test_search_handles_missing_documents_and_metadata(chroma_store, mock_collection):
    mock_collection.query.return_value = {"ids": [["a"]], "documents": [[None]], "metadatas": [[None]], "distances": None}

    assert chroma_store.search("q", top_k=1) == [Document(id="a", content="", metadata={}, score=None)]

@pytest.mark.parametrize("top_k", [0, -1])
def test_search_rejects_non_positive_top_k(chroma_store, mock_collection, top_k):
    with pytest.raises(ValueError):
        chroma_store.search("q", top_k=top_k)
    mock_collection.query.assert_not_called()

def test_search_wraps_chroma_errors(chroma_store, mock_collection):
    mock_collection.query.side_effect = ConnectionError("chroma server down")
    with pytest.raises(RetrievalUnavailable):
        chroma_store.search("q", top_k=3)

def test_search_wraps_embedding_errors(chroma_store, mock_embedding_service, mock_collection):
    mock_embedding_service.embed_query.side_effect = RuntimeError("model not loaded")
    with pytest.raises(RetrievalUnavailable):
        chroma_store.search("q", top_k=3)
    mock_collection.query.assert_not_called()

def test_add_texts_upserts_with_default_ids(chroma_store, mock_collection):
    ids = chroma_store.add_texts(["one", "three"], metadatas=[{"source": "notes.txt"}, {}])

    expected = [
        "notes.txt_" + hashlib.sha1(b"one").hexdigest()[:16],
        "doc_" + hashlib.sha1(b"three").hexdigest()[:16],
    ]
    assert ids == expected
    mock_collection.upsert.assert_called_once_with(
        ids=expected,
        embeddings=[[3.0, 0.0, 1.0], [5.0, 0.0, 1.0]],
        documents=["one", "three"],
        metadatas=[{"source": "notes.txt"}, {"source": expected[1]}],
    )

def test_add_texts_uses_given_ids(chroma_store, mock_collection):
    assert chroma_store.add_texts(["x"], ids=["custom"]) == ["custom"]
    assert mock_collection.upsert.call_args.kwargs["ids"] == ["custom"]

def test_add_texts_empty_is_noop(chroma_store, mock_collection, mock_embedding_service):
    assert chroma_store.add_texts([]) == []
    mock_collection.upsert.assert_not_called()
    mock_embedding_service.embed_documents.assert_not_called()

def test_add_texts_length_mismatch(chroma_store):
    with pytest.raises(ValueError):
        chroma_store.add_texts(["a", "b"], metadatas=[{"source": "a"}])
    with pytest.raises(ValueError):
        chroma_store.add_texts(["a"], ids=["1", "2"])

def test_add_texts_wraps_errors(chroma_store, mock_collection):
    mock_collection.upsert.side_effect = RuntimeError("readonly database")
    with pytest.raises(RetrievalUnavailable):
        chroma_store.add_texts(["a"])

def test_count(chroma_store, mock_collection):
    mock_collection.count.return_value = 4
    assert chroma_store.count() == 4

def test_default_ids_do_not_depend_on_position(chroma_store):
    first = chroma_store.add_texts(["alpha"], metadatas=[{"source": "a.txt"}])
    second = chroma_store.add_texts(["beta", "alpha"], metadatas=[{"source": "b.txt"}, {"source": "a.txt"}])

    assert second[1] == first[0]
