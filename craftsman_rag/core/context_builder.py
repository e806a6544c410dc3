"""
Prompt context assembly.

Turns vector search results into the delimited document blocks placed in
the system prompt. The same delimiters are parsed back out of model answers
by ``craftsman_parser``.

Dependencies: craftsman_rag.boundary.vdb
System role: Retrieved-context formatting for RAG prompts
"""

from typing import Literal

from pydantic import BaseModel, Field

from craftsman_rag.boundary.vdb.vector_schemas import VectorSearchResult

NO_DOCUMENTS_CONTEXT = "No documents found in the knowledge base."
NO_RELEVANT_CONTEXT = "No sufficiently relevant information found in the knowledge base for this query."
RETRIEVAL_ERROR_CONTEXT = "Error retrieving context information."
TRUNCATION_SUFFIX = "\n[Context truncated due to length]"

DOCUMENT_START = "--- المستند"
DOCUMENT_END = "--- نهاية المستند"

ContextStatus = Literal["found", "empty_collection", "no_relevant", "error"]


class RetrievedContext(BaseModel):
    """Outcome of the retrieval step for one query."""

    text: str = Field(description="Context placed in the system prompt")
    status: ContextStatus
    documents: list[VectorSearchResult] = Field(default_factory=list)
    truncated: bool = False

    @property
    def documents_found(self) -> bool:
        return self.status == "found"

    @classmethod
    def fallback(cls, status: ContextStatus) -> "RetrievedContext":
        text = {
            "empty_collection": NO_DOCUMENTS_CONTEXT,
            "no_relevant": NO_RELEVANT_CONTEXT,
            "error": RETRIEVAL_ERROR_CONTEXT,
        }[status]
        return cls(text=text, status=status)


def document_title(result: VectorSearchResult) -> str:
    """Stored title, else the first line of the text cut to 50 characters."""
    if result.title:
        return result.title
    return result.text.split("\n")[0][:50] + "..."


def format_document(index: int, result: VectorSearchResult) -> str:
    """Format one result as a numbered block (``index`` is 1-based)."""
    if result.similarity is not None:
        relevance = f"(Relevance: {result.similarity:.2f})"
    else:
        relevance = "(Relevance score unavailable)"

    lines = [f"{DOCUMENT_START} {index}: {document_title(result)} {relevance} ---", result.text.rstrip("\n")]
    if result.source_id:
        lines.append(f"sourceId: {result.source_id}")
    lines.append(f"{DOCUMENT_END} {index} ---")
    return "\n".join(lines)


def format_context(results: list[VectorSearchResult], max_length: int = 30000) -> RetrievedContext:
    """
    Build the prompt context for ``results``.

    Args:
        results: Search results, most relevant first
        max_length: Character budget; longer context is cut and suffixed

    Returns:
        RetrievedContext with status ``found``, or the no-relevant fallback
        when ``results`` is empty
    """
    if not results:
        return RetrievedContext.fallback("no_relevant")

    text = "\n\n".join(format_document(i, r) for i, r in enumerate(results, start=1))
    truncated = len(text) > max_length
    if truncated:
        text = text[:max_length] + TRUNCATION_SUFFIX

    return RetrievedContext(text=text, status="found", documents=results, truncated=truncated)
