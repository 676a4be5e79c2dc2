# main.py

"""Streamlit playground for the marketplace moderation engine.

Lets a reviewer try the chat-send and listing-description policies and
see what the detector flagged.
"""

import streamlit as st
import logging
from moderation.logging_config import configure_logging
from moderation.service.audit import InMemoryAuditLog
from moderation.service.pipeline import send_chat_message, submit_listing_description

configure_logging()

logger = logging.getLogger(__name__)


def _audit_log() -> InMemoryAuditLog:
    if "audit_log" not in st.session_state:
        st.session_state["audit_log"] = InMemoryAuditLog()
    return st.session_state["audit_log"]


def main():
    """Run the Streamlit application UI."""
    st.set_page_config(
        layout="wide", page_title="Marketplace Moderation", page_icon="🛡️"
    )

    st.title("Marketplace Moderation")
    st.markdown(
        "Keeps conversations and listings on the platform by catching shared contact details and off-platform payment talk."
    )
    st.markdown("---")

    audit = _audit_log()
    chat_tab, listing_tab = st.tabs(["Chat message", "Listing description"])

    with chat_tab:
        message = st.text_area(
            "Message", height=150, placeholder="Type a message to the seller..."
        )

        if st.button("Send", type="primary", key="send_chat"):
            if not message or not message.strip():
                st.warning("Please enter a message.")
                logger.warning("Chat send attempted with empty message")
            else:
                try:
                    result = send_chat_message(message, audit=audit, thread_id="demo")
                except Exception:
                    st.error("An unexpected error occurred while sending.")
                    logger.error(
                        "Unexpected error in chat send",
                        exc_info=True,
                        extra={"text_length": len(message)},
                    )
                else:
                    if result.was_substituted:
                        st.error(
                            f"Message flagged ({result.verdict.category}). Sent instead:"
                        )
                    else:
                        st.success("Message sent:")
                    st.info(result.delivered_text)

    with listing_tab:
        description = st.text_area(
            "Description",
            height=250,
            placeholder="Describe the item you are selling...",
        )

        if st.button("Enhance description", type="primary", key="enhance_listing"):
            if not description or not description.strip():
                st.warning("Please enter a description.")
                logger.warning("Description enhancement attempted with empty input")
            else:
                try:
                    result = submit_listing_description(description, audit=audit)
                except Exception:
                    st.error("An unexpected error occurred while enhancing.")
                    logger.error(
                        "Unexpected error in listing submission",
                        exc_info=True,
                        extra={"text_length": len(description)},
                    )
                else:
                    if result.was_rejected:
                        st.warning(result.warning)
                    else:
                        st.success("Description enhanced.")
                    st.text_area("Result", value=result.result_text, height=250)

    with st.sidebar:
        st.header("Flagged content")
        stats = audit.analytics()
        st.metric("Total flagged", stats["total_flagged"])

        for entry in reversed(audit.entries()):
            st.caption(f"{entry.policy} · {entry.category} · {entry.rule_name}")
            st.text(entry.snippet)


if __name__ == "__main__":
    main()
