"""
RAG chat agent.

Embeds the latest question, retrieves craftsman documents from the vector
store, assembles the grounded prompt and streams the Gemini answer as
StreamEvents. Also serves the general (retrieval-free) assistant.

Generation is started eagerly: ``prepare_*`` awaits the first model chunk,
so a provider failure surfaces as GenerationError before any event is
sent, while failures later in the stream become an ``error`` event.

Dependencies: langchain_core, fastapi.concurrency, craftsman_rag.boundary
System role: RAG Q&A orchestration
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any

from fastapi.concurrency import run_in_threadpool
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate

from craftsman_rag.boundary.embeddings.base import QUERY_TASK, Embedder
from craftsman_rag.boundary.vdb.base import VectorStore
from craftsman_rag.boundary.vdb.vector_schemas import VectorQuery
from craftsman_rag.core.context_builder import RetrievedContext, format_context
from craftsman_rag.core.craftsman_parser import contains_craftsman_data, extract_craftsmen
from craftsman_rag.core.exceptions import CraftsmanRAGException, GenerationError, RetrievalError
from craftsman_rag.core.prompts import GENERAL_CHAT_PROMPT, RAG_CHAT_PROMPT, join_instructions
from craftsman_rag.models.chat import ChatMessage
from craftsman_rag.models.streaming import ContextSource, StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


def chunk_text(content: Any) -> str:
    """Flatten chunk content, which Gemini may return as a list of parts."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


def to_conversation(messages: list[ChatMessage]) -> tuple[list[BaseMessage], list[str]]:
    """
    Split client messages into the conversation and extra system text.

    System messages are returned separately so they can be folded into the
    leading system prompt. Messages without text content are dropped.
    """
    conversation: list[BaseMessage] = []
    system_parts: list[str] = []
    for message in messages:
        content = message.content if isinstance(message.content, str) else chunk_text(message.content)
        if not content or not content.strip():
            continue
        if message.role == "system":
            system_parts.append(content)
        elif message.role == "assistant":
            conversation.append(AIMessage(content=content))
        else:
            conversation.append(HumanMessage(content=content))
    return conversation, system_parts


class PreparedStream:
    """A generation that has produced its first chunk and is ready to be relayed."""

    def __init__(
        self,
        chunks: AsyncIterator[str],
        context: RetrievedContext | None = None,
        extract_cards: bool = True,
    ) -> None:
        self._chunks = chunks
        self.context = context
        self._extract_cards = extract_cards

    async def events(self) -> AsyncGenerator[StreamEvent, None]:
        """
        Yield context, token, craftsmen and complete events.

        A failure while streaming ends the sequence with an error event.
        """
        if self.context is not None:
            yield StreamEvent(
                event=StreamEventType.CONTEXT,
                data={
                    "documents_found": self.context.documents_found,
                    "document_count": len(self.context.documents),
                    "sources": [
                        ContextSource(
                            document_id=doc.document_id,
                            title=doc.title,
                            source_id=doc.source_id,
                            similarity=doc.similarity,
                        ).model_dump()
                        for doc in self.context.documents
                    ],
                },
            )

        full_answer = ""
        token_index = 0
        try:
            async for token in self._chunks:
                if not token:
                    continue
                full_answer += token
                yield StreamEvent(
                    event=StreamEventType.TOKEN,
                    data={"token": token, "index": token_index},
                )
                token_index += 1
        except Exception as e:
            logger.error(f"{__name__}:events - LLM stream failed after {token_index} tokens: {type(e).__name__}: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "GENERATION_FAILED", "message": str(e)},
            )
            return

        logger.info(f"{__name__}:events - Streamed {token_index} tokens, answer_len={len(full_answer)}")

        if self._extract_cards and contains_craftsman_data(full_answer):
            craftsmen = extract_craftsmen(full_answer)
            if craftsmen:
                yield StreamEvent(
                    event=StreamEventType.CRAFTSMEN,
                    data={"craftsmen": [c.model_dump() for c in craftsmen]},
                )

        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={"full_answer": full_answer},
        )


class RAGAgent:
    """
    Retrieval-augmented chat over the craftsman collection.

    Blocking embedder and store calls run in the threadpool.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        embedder: Embedder,
        model: BaseChatModel,
        general_model: BaseChatModel | None = None,
        search_limit: int = 15,
        min_similarity: float = 0.2,
        max_context_length: int = 30000,
        debug: bool = False,
        model_name: str | None = None,
    ) -> None:
        """
        Initialize the agent with its collaborators.

        Args:
            vector_store: Store holding craftsman documents
            embedder: Query embedder
            model: Chat model used for grounded answers
            general_model: Chat model for the general assistant (defaults to ``model``)
            search_limit: Candidates fetched per query
            min_similarity: Inclusive similarity threshold
            max_context_length: Character budget of the context
            debug: Append a retrieval diagnostic line to the system prompt
            model_name: Model identifier used in logs and errors
        """
        self._vector_store = vector_store
        self._embedder = embedder
        self._model = model
        self._general_model = general_model or model
        self._search_limit = search_limit
        self._min_similarity = min_similarity
        self._max_context_length = max_context_length
        self._debug = debug
        self._model_name = model_name or type(model).__name__

    async def retrieve_context(self, question: str) -> RetrievedContext:
        """
        Retrieve and format context for ``question``.

        Never raises for upstream failures; they yield the error fallback.
        """
        try:
            embedding = await run_in_threadpool(self._embedder.embed, question, QUERY_TASK)
            logger.info(f"{__name__}:retrieve_context - Query embedding length {embedding.dimensions}")
            if embedding.dimensions != self._vector_store.dimension:
                raise RetrievalError(
                    "Query embedding does not match the collection dimension",
                    details={"expected": self._vector_store.dimension, "actual": embedding.dimensions},
                )

            has_documents = await run_in_threadpool(self._vector_store.has_documents)
            if not has_documents:
                logger.warning(f"{__name__}:retrieve_context - No documents in collection, check data loading")
                return RetrievedContext.fallback("empty_collection")

            query = VectorQuery(
                embedding=embedding.embedding,
                limit=self._search_limit,
                min_similarity=self._min_similarity,
            )
            results = await run_in_threadpool(self._vector_store.search, query)
        except CraftsmanRAGException as e:
            logger.error(f"{__name__}:retrieve_context - Retrieval failed: {e}")
            return RetrievedContext.fallback("error")

        context = format_context(results, self._max_context_length)
        if context.documents_found:
            logger.info(
                f"{__name__}:retrieve_context - {len(results)} documents meet similarity threshold "
                f"of {self._min_similarity}, context_len={len(context.text)}, truncated={context.truncated}"
            )
        else:
            logger.warning(f"{__name__}:retrieve_context - No documents meet the criteria for this query")
        return context

    def build_messages(self, messages: list[ChatMessage], context: RetrievedContext) -> list[BaseMessage]:
        """Assemble the grounded prompt: system prompt with context, then the conversation."""
        conversation, system_parts = to_conversation(messages)
        if self._debug:
            if context.documents_found:
                system_parts.append(f"[DEBUG: Found {len(context.documents)} relevant documents]")
            else:
                system_parts.append("[DEBUG: No relevant documents found in the database]")

        return self._render(RAG_CHAT_PROMPT, conversation, system_parts, context=context.text)

    def build_general_messages(self, messages: list[ChatMessage]) -> list[BaseMessage]:
        conversation, system_parts = to_conversation(messages)
        return self._render(GENERAL_CHAT_PROMPT, conversation, system_parts)

    async def prepare_chat(self, messages: list[ChatMessage]) -> PreparedStream:
        """
        Retrieve context for the latest message and start generation.

        Raises:
            GenerationError: If the model fails before its first chunk
        """
        question = messages[-1].content
        context = await self.retrieve_context(question)
        prompt_messages = self.build_messages(messages, context)
        logger.info(
            f"{__name__}:prepare_chat - Built {len(prompt_messages)} prompt messages, "
            f"system_len={len(prompt_messages[0].content)}"
        )
        chunks = await self._start(self._model, prompt_messages)
        return PreparedStream(chunks, context=context)

    async def prepare_general(self, messages: list[ChatMessage]) -> PreparedStream:
        """Start a general assistant generation (no retrieval, no cards)."""
        prompt_messages = self.build_general_messages(messages)
        chunks = await self._start(self._general_model, prompt_messages)
        return PreparedStream(chunks, context=None, extract_cards=False)

    @staticmethod
    def _render(
        prompt: ChatPromptTemplate,
        conversation: list[BaseMessage],
        system_parts: list[str],
        **variables: str,
    ) -> list[BaseMessage]:
        return prompt.invoke({
            **variables,
            "extra_instructions": join_instructions(system_parts),
            "conversation": conversation,
        }).to_messages()

    async def _start(self, model: BaseChatModel, prompt_messages: list[BaseMessage]) -> AsyncIterator[str]:
        """Open the model stream and await its first chunk."""
        logger.info(f"{__name__}:_start - Starting LLM stream (model={self._model_name})")
        stream = model.astream(prompt_messages).__aiter__()
        try:
            first = await stream.__anext__()
        except StopAsyncIteration:
            first = None
        except Exception as e:
            logger.error(f"{__name__}:_start - LLM stream failed to start: {type(e).__name__}: {e}")
            raise GenerationError(
                message="Failed to start response generation",
                model=self._model_name,
                details={"error": str(e)},
            ) from e

        async def relay() -> AsyncGenerator[str, None]:
            if first is not None:
                yield chunk_text(first.content)
            async for chunk in stream:
                yield chunk_text(chunk.content)

        return relay()
