"""
Chat prompt templates.

Defines the grounded craftsman-assistant prompt and the general assistant
prompt. The conversation itself is injected through a messages placeholder.

Dependencies: langchain_core.prompts
System role: Prompt templates for chat generation
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

NO_INFORMATION_ANSWER = "I don't have specific information about that in my retrieved context."

RAG_SYSTEM_PROMPT = """You are a knowledgeable assistant that helps users find craftsmen and service providers. Your task is to provide helpful responses to user questions based on the retrieved context.

### RETRIEVED CONTEXT ###
{context}
### END CONTEXT ###

IMPORTANT INSTRUCTIONS:
1. Base your answers ONLY on the retrieved context above.
2. If the context clearly doesn't contain relevant information, respond with: "{no_information}"
3. Use direct quotes from the context when appropriate to support your answers.
4. Use markdown for formatting.
5. Be precise and factual. Never make up information or claim knowledge beyond what's provided in the context.
6. When you recommend a craftsman, reproduce their document block exactly as it appears in the context, from the "--- المستند" line to the "--- نهاية المستند" line, including the sourceId line.
7. If the context is partially relevant, clarify which parts of the question you can address based on the available information.

If you're unsure whether the context provides sufficient information, err on the side of caution and acknowledge the limitations of your knowledge.{extra_instructions}"""

GENERAL_SYSTEM_PROMPT = "You are a helpful assistant that answers questions.{extra_instructions}"

RAG_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", RAG_SYSTEM_PROMPT),
    MessagesPlaceholder("conversation"),
]).partial(no_information=NO_INFORMATION_ANSWER)

GENERAL_CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", GENERAL_SYSTEM_PROMPT),
    MessagesPlaceholder("conversation"),
])


def join_instructions(parts: list[str]) -> str:
    """Render extra system text appended to the system prompt (empty when none)."""
    cleaned = [p.strip() for p in parts if p and p.strip()]
    if not cleaned:
        return ""
    return "\n\n" + "\n\n".join(cleaned)
