# tests/test_server.py
import base64

import pytest
from unittest.mock import MagicMock

from fastmcp import Client


def _data(result):
    return getattr(result, "data", None) or getattr(result, "structured", None) \
           or getattr(result, "structured_content", None)


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture(scope="module")
def engine():
    from docchat.engine import DocumentChatEngine
    return DocumentChatEngine()


@pytest.fixture
def mcp_server(engine):
    """
    Create and return a FastMCP server instance for testing.
    The engine is shared across tests to build the spaCy pipeline once.
    """
    from docchat.server import MCPServerApp
    app = MCPServerApp(engine=engine, mcp_server_name="test-mcp")
    return app.mcp  # FastMCP Instance


# ----------- Tool Registration ----------- #
@pytest.mark.asyncio
async def test_tools_registered(mcp_server):
    async with Client(mcp_server) as client:
        tools = await client.list_tools()
        names = [t.name for t in tools]
        for tool_name in ("chat_with_file", "analyze_document", "classify_intent"):
            assert tool_name in names, f"{tool_name} should be registered"


# ----------- Chat With File Tool Tests ----------- #
@pytest.mark.asyncio
async def test_chat_with_file_summary(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "chat_with_file",
            {
                "message": "summarize",
                "data": _b64("Hello. World is great."),
                "mime_type": "text/plain",
            }
        )
        data = _data(result)

        assert data is not None, "No data returned from tool call"
        assert data.get("ok") is True
        assert data["results"].startswith("This is a short document with 4 words.")


@pytest.mark.asyncio
async def test_chat_with_file_without_document(mcp_server):
    from docchat.responder.intent_classifier import ConversationIntent
    from docchat.responder.synthesizer import CONVERSATION_RESPONSES

    async with Client(mcp_server) as client:
        result = await client.call_tool("chat_with_file", {"message": "hello"})
        data = _data(result)

        assert data.get("ok") is True
        assert data["results"] == CONVERSATION_RESPONSES[ConversationIntent.GREETING]


@pytest.mark.asyncio
async def test_chat_with_file_with_history(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "chat_with_file",
            {
                "message": "show statistics",
                "data": "data:text/plain;base64," + _b64("Hello. World is great."),
                "mime_type": "text/plain",
                "history": [
                    {"role": "user", "content": "summarize"},
                    {"role": "assistant", "content": "This is a short document."},
                ],
            }
        )
        data = _data(result)

        assert data.get("ok") is True
        assert "• Word count: 4" in data["results"]


@pytest.mark.asyncio
async def test_chat_with_file_unreadable(mcp_server):
    from docchat.engine import EXTRACTION_UNAVAILABLE_MESSAGE

    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "chat_with_file",
            {"message": "summarize", "data": "***", "mime_type": "text/plain"}
        )
        data = _data(result)

        # The apology is still an answer
        assert data.get("ok") is True
        assert data["results"] == EXTRACTION_UNAVAILABLE_MESSAGE


# ----------- Analyze Document Tool Tests ----------- #
@pytest.mark.asyncio
async def test_analyze_document(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "analyze_document",
            {"data": _b64("Dr. Jane Smith visited London."), "mime_type": "text/plain"}
        )
        data = _data(result)

        assert data.get("ok") is True
        assert data.get("status") == "text"
        record = data["results"]
        assert record["word_count"] == 5
        assert record["people"] == ["Dr. Jane Smith"]
        assert record["places"] == ["London"]
        assert record["mime_type"] == "text/plain"


@pytest.mark.asyncio
async def test_analyze_document_unreadable(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "analyze_document",
            {"data": "***", "mime_type": "text/plain"}
        )
        data = _data(result)

        assert data.get("ok") is False
        assert data.get("status") == "unavailable"
        assert "No readable text" in data.get("error")


@pytest.mark.asyncio
async def test_analyze_document_extracts_off_event_loop(engine, mcp_server):
    """Payload decoding runs in a worker thread, not on the event loop thread."""
    import threading
    from unittest.mock import patch

    extract = engine.extractor.extract
    threads = []

    def recording_extract(payload):
        threads.append(threading.current_thread())
        return extract(payload)

    with patch.object(engine.extractor, "extract", side_effect=recording_extract):
        async with Client(mcp_server) as client:
            result = await client.call_tool(
                "analyze_document",
                {"data": _b64("Hello. World is great."), "mime_type": "text/plain"}
            )
            loop_thread = threading.current_thread()

    assert _data(result).get("ok") is True
    assert len(threads) == 1
    assert threads[0] is not loop_thread


@pytest.mark.asyncio
async def test_analyze_document_analyzer_error():
    from docchat.engine import DocumentChatEngine
    from docchat.server import MCPServerApp

    analyzer = MagicMock()
    analyzer.analyze.side_effect = RuntimeError("boom")
    app = MCPServerApp(engine=DocumentChatEngine(analyzer=analyzer), mcp_server_name="test-mcp")

    async with Client(app.mcp) as client:
        result = await client.call_tool(
            "analyze_document",
            {"data": _b64("Hello."), "mime_type": "text/plain"}
        )
        data = _data(result)

        assert data.get("ok") is False
        assert data.get("error") == "boom"


# ----------- Classify Intent Tool Tests ----------- #
@pytest.mark.asyncio
async def test_classify_intent(mcp_server):
    async with Client(mcp_server) as client:
        with_doc = _data(await client.call_tool("classify_intent", {"message": "Show statistics"}))
        without_doc = _data(await client.call_tool(
            "classify_intent", {"message": "Please help me", "has_document": False}
        ))

        assert with_doc.get("results") == "statistics"
        assert without_doc.get("results") == "request"
