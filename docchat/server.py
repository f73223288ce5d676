"""
docchat MCP Server

Exposes the document chat engine as MCP tools.

Transport: stdio only (stdout carries the protocol, logs go to stderr).

Expected MCP Tool Return Format:
{
    "ok": bool,
    "results": Any,          # Present if ok is True
    "error": str            # Present if ok is False
}
"""

import argparse
import asyncio
import logging
import os
import signal
from typing import Annotated, Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field, ValidationError

from .analyzer import ExtractionResult
from .common.config import DocChatConfig, load_config
from .common.schemas import AnalysisRecord, Payload
from .engine import DocumentChatEngine
from .responder import classify, classify_conversation

logger = logging.getLogger("docchat.server")


class MCPServerApp:
    """
    Main application class for the MCP server.

    The engine is synchronous; tools run it in a worker thread so the
    event loop keeps serving other requests.
    """

    def __init__(
            self,
            engine: Optional[DocumentChatEngine] = None,
            mcp_server_name: str = "docchat_mcp_server",
            config: Optional[DocChatConfig] = None,
        ) -> None:
        """
        Initializes the MCPServerApp.
        Args:
            engine (DocumentChatEngine): Engine instance; built from config when omitted.
            mcp_server_name (str): The name of the MCP server.
            config (DocChatConfig): Configuration used when building the engine.
        """
        self.engine = engine or DocumentChatEngine(config=config)
        self.mcp = FastMCP(name=mcp_server_name)

        # ---------- MCP Tools: Chat With File ---------- #
        @self.mcp.tool(
            name="chat_with_file",
            description=(
                "Answer a question about a file using local rule-based analysis. "
                "Pass the file only on the first turn of a conversation."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_chat_with_file(
            message: Annotated[str, Field(description="the user's message")],
            data: Annotated[Optional[str], Field(description="base64 file content or data: URL")] = None,
            mime_type: Annotated[Optional[str], Field(description="declared media type of the file")] = None,
            history: Annotated[Optional[List[Dict[str, str]]], Field(description="prior turns as {role, content}")] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to answer a message, optionally about a file.

            Args:
                message (str): The user's message.
                data (str): Base64 file content; omit for a message without a document.
                mime_type (str): Media type of the file.
                history (List[Dict[str, str]]): Prior conversation turns.

            Returns:
                Dict[str, Any]: {"ok": True, "results": <answer>}
            """
            payload = None
            if data is not None:
                payload = {"data": data, "mime_type": mime_type or ""}
            answer = await asyncio.to_thread(self.engine.respond, message, payload, history or [])
            return {"ok": True, "results": answer}

        # ---------- MCP Tools: Analyze Document ---------- #
        @self.mcp.tool(
            name="analyze_document",
            description="Run the linguistic analysis over a file and return the analysis record.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_analyze_document(
            data: Annotated[str, Field(description="base64 file content or data: URL")],
            mime_type: Annotated[str, Field(description="declared media type of the file")],
        ) -> Dict[str, Any]:
            """
            MCP tool to analyze a document.

            Returns:
                Dict[str, Any]: The analysis record, or an error when no text is readable.
            """
            try:
                payload = Payload(data=data, mime_type=mime_type)
                extraction, record = await asyncio.to_thread(self._extract_and_analyze, payload)
                if record is None:
                    return {
                        "ok": False,
                        "status": extraction.status.value,
                        "error": f"No readable text: {extraction.reason}",
                    }
            except ValidationError as e:
                return {"ok": False, "error": f"Invalid payload: {e}"}
            except Exception as e:
                logger.error("Document analysis failed: %s", e, exc_info=True)
                return {"ok": False, "error": str(e)}

            return {"ok": True, "status": extraction.status.value, "results": record.model_dump()}

        # ---------- MCP Tools: Classify Intent ---------- #
        @self.mcp.tool(
            name="classify_intent",
            description="Classify a message into the document or no-document intent vocabulary.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_classify_intent(
            message: Annotated[str, Field(description="the user's message")],
            has_document: Annotated[bool, Field(description="whether a document is loaded")] = True,
        ) -> Dict[str, Any]:
            """
            MCP tool to classify a message.

            Returns:
                Dict[str, Any]: {"ok": True, "results": <intent value>}
            """
            intent = classify(message) if has_document else classify_conversation(message)
            return {"ok": True, "results": intent.value}

    def _extract_and_analyze(self, payload: Payload) -> Tuple[ExtractionResult, Optional[AnalysisRecord]]:
        """Decode and analyze a payload; runs in a worker thread"""
        extraction = self.engine.extractor.extract(payload)
        if not extraction.is_available:
            return extraction, None
        return extraction, self.engine.analyzer.analyze(extraction.text, payload.mime_type)

    def run(self) -> None:
        """Runs the MCP server using stdio transport."""
        self.mcp.run(transport="stdio")


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    config = load_config()

    parser = argparse.ArgumentParser(description="Run the docchat MCP server (stdio).")
    parser.add_argument(
        "--server-name",
        default=os.getenv("MCP_SERVER_NAME", "docchat_mcp_server"),
        help="Advertised MCP server name.",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG" if config.debug else config.log_level,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Logging level (logs go to stderr).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.info("Starting %s", args.server_name)

    app = MCPServerApp(mcp_server_name=args.server_name, config=config)

    def _handle_shutdown(signum, frame):
        raise SystemExit(0)
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is not None:
            signal.signal(sig, _handle_shutdown)

    app.run()


if __name__ == "__main__":
    main()
