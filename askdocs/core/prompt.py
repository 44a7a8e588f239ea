"""
Grounded answering prompt.

Defines the fixed system instruction and the user message template that
embeds the retrieved context block ahead of the question.

Dependencies: langchain_core.prompts
System role: Prompt template for retrieval-augmented answering
"""

from dataclasses import dataclass

from langchain_core.prompts import ChatPromptTemplate

from askdocs.boundary.vdb.vector_schemas import RetrievedMatch

CONTEXT_DELIMITER = "---"

SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer questions based ONLY on the provided context. "
    "If the context doesn't contain enough information, say "
    "\"I don't have that information in the available documents.\""
)

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Context from documents:

{context}
Question: {question}

Answer based ONLY on the context above. Be specific and cite which information came from which part of the context."""),
])


@dataclass(frozen=True)
class PromptParts:
    """Rendered system instruction and user message."""

    system: str
    user: str


def build_context(matches: list[RetrievedMatch]) -> str:
    """
    Concatenate match contents into one context block.

    Each content is followed by a delimiter line, in the order given
    (descending similarity as returned by the store).
    """
    return "\n".join(f"{match.content}\n{CONTEXT_DELIMITER}" for match in matches)


def build_prompt(question: str, matches: list[RetrievedMatch]) -> PromptParts:
    """
    Render the generation request for a question and its matches.

    Args:
        question: User question
        matches: Retrieved context chunks

    Returns:
        PromptParts: System instruction and user message text
    """
    messages = RAG_PROMPT.format_messages(
        context=build_context(matches),
        question=question,
    )
    return PromptParts(system=str(messages[0].content), user=str(messages[1].content))
