"""Debug logging utilities for the WebDAV client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lxml import etree

logger = logging.getLogger("py_davclient")

PREVIEW_BYTES = 200


def format_xml(xml_bytes: bytes | str) -> str:
    """Format XML with proper indentation.

    Args:
        xml_bytes: XML content as bytes or string

    Returns:
        Pretty-formatted XML string, or the input decoded as-is if it does not parse
    """
    if isinstance(xml_bytes, str):
        xml_bytes = xml_bytes.encode("utf-8")

    try:
        parser = etree.XMLParser(remove_blank_text=True)
        root = etree.fromstring(xml_bytes, parser)
    except etree.XMLSyntaxError:
        return xml_bytes.decode("utf-8", errors="replace")
    return etree.tostring(root, pretty_print=True, encoding="unicode")


def is_xml_content(content_type: str | None) -> bool:
    """Check if content type is XML."""
    if not content_type:
        return False

    xml_types = ["application/xml", "text/xml"]
    return any(xml_type in content_type.lower() for xml_type in xml_types)


def redact_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Copy headers with the Authorization value hidden."""
    return {
        k: "[REDACTED]" if k.lower() == "authorization" else v for k, v in headers.items()
    }


def _log_body(title: str, content_type: str, body: bytes) -> None:
    logger.info("-" * 80)
    logger.info(f"{title}:")

    if is_xml_content(content_type):
        for line in format_xml(body).split("\n"):
            if line.strip():
                logger.info(f"  {line}")
    else:
        body_preview = body[:PREVIEW_BYTES].decode("utf-8", errors="replace")
        logger.info(f"  [{len(body)} bytes] {body_preview}")
        if len(body) > PREVIEW_BYTES:
            logger.info(f"  ... ({len(body) - PREVIEW_BYTES} more bytes)")


def log_request(method: str, url: str, headers: Mapping[str, Any], body: bytes | None) -> None:
    """Log an outgoing HTTP request.

    Args:
        method: HTTP method
        url: Request URL
        headers: Request headers
        body: Request body, or None when it is streamed from disk
    """
    logger.info("=" * 80)
    logger.info(f">>> OUTGOING REQUEST: {method} {url}")
    logger.info("-" * 80)

    logger.info("Headers:")
    for header, value in redact_headers(headers).items():
        logger.info(f"  {header}: {value}")

    if body:
        _log_body("Request Body", str(headers.get("Content-Type", "")), body)

    logger.info("=" * 80)


def log_response(status_code: int, headers: Mapping[str, Any], body: bytes | None) -> None:
    """Log an incoming HTTP response.

    Args:
        status_code: HTTP status code
        headers: Response headers
        body: Response body (if any)
    """
    logger.info("=" * 80)
    logger.info(f"<<< INCOMING RESPONSE: {status_code}")
    logger.info("-" * 80)

    interesting_headers = ["Content-Type", "Content-Length", "ETag", "DAV", "Allow", "Location"]

    logger.info("Headers:")
    for header in interesting_headers:
        value = headers.get(header.lower(), headers.get(header))
        if value:
            logger.info(f"  {header}: {value}")

    if body:
        _log_body("Response Body", str(headers.get("content-type", "")), body)

    logger.info("=" * 80)
    logger.info("")


def setup_debug_logging() -> None:
    """Configure debug logging for the WebDAV client."""
    logger.setLevel(logging.DEBUG)

    # Plain format since the messages are laid out by hand
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.propagate = False
