"""Command line entry point.

    rag-example q "What is in the knowledge base?"
    rag-example load notes/*.txt
    rag-example serve
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rag_example.core.config import Settings, get_settings
from rag_example.core.dependencies import build_rag_service, get_embedding_service, get_vector_store
from rag_example.core.errors import RAGExampleError
from rag_example.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def ask_question(message: str, settings: Settings) -> str:
    """Runs the RAG flow for ``message`` and returns the answer."""
    rag_service = build_rag_service(settings)
    return rag_service.answer(message)


def load_documents(paths: List[Path], settings: Settings) -> List[str]:
    """Adds one document per text file to the vector store.

    Raises:
        FileNotFoundError: If a path is not a file.
    """
    # Ids are resolved paths, so reloading a file replaces its document.
    files = {}
    for path in paths:
        if not path.is_file():
            raise FileNotFoundError(f"Not a file: {path}")
        files[str(path.resolve())] = path

    ids = list(files)
    texts = [path.read_text(encoding="utf-8") for path in files.values()]
    metadatas = [{"source": path.name} for path in files.values()]

    vector_store = get_vector_store(settings, get_embedding_service(settings))
    return vector_store.add_texts(texts, metadatas=metadatas, ids=ids)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rag-example", description="Retrieve-then-generate demo over Ollama and ChromaDB.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    q_parser = subparsers.add_parser("q", help="Ask a question to the assistant")
    q_parser.add_argument("message", nargs="?", default=settings.default_question, help="The question to ask.")

    load_parser = subparsers.add_parser("load", help="Add text files to the vector store")
    load_parser.add_argument("paths", nargs="+", type=Path, help="Text files, one document each.")

    subparsers.add_parser("serve", help="Run the HTTP API")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings.log_level)

    try:
        if args.command == "q":
            print(ask_question(args.message, settings))
        elif args.command == "load":
            ids = load_documents(args.paths, settings)
            print(f"Loaded {len(ids)} documents.")
        elif args.command == "serve":
            from rag_example.main import run
            run(settings)
    except (RAGExampleError, FileNotFoundError, ValueError) as e:
        logger.error(f"'{args.command}' failed: {e}", exc_info=settings.debug)
        label = getattr(e, "label", type(e).__name__)
        print(f"error [{label}]: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
