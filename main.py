#!/usr/bin/env python3
"""
ragcore demo application.

Builds the pipeline from the environment (.env) and answers a few questions
in one session. DOCUMENTS_DIR is ingested at startup when
INITIALIZE_ON_STARTUP is set, otherwise on the first request. Without a
Chroma server the pipeline falls back to the in-process index; without an
API key the answers come from the rule-based responder.

    EMBEDDER_TYPE=hash INDEX_BACKEND=memory python main.py
"""

import asyncio
import sys

from loguru import logger

from ragcore import QueryOptions, configure_logging, get_settings, start_pipeline
from ragcore.api import handle_chat_request

QUESTIONS = [
    "What programs do you offer?",
    "How does the admissions process work?",
    "Where is the campus located?",
]


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    pipeline = await start_pipeline(settings)

    options = QueryOptions(similarity_threshold=0.3 if settings.EMBEDDER_TYPE == "hash" else 0.7)
    for question in QUESTIONS:
        reply = await handle_chat_request(pipeline, question, session_id="demo", options=options)
        if reply.status_code != 200:
            logger.error(f"Request failed ({reply.status_code}): {reply.body}")
            continue

        body = reply.body
        print(f"\nQ: {question}")
        print(f"A: {body['response']}")
        for source in body["sources"]:
            print(f"   - {source['filename']} (chunk {source['chunk_index']}, similarity {source['similarity']:.2f})")
        print(f"   [{body['metadata']['mode']} / {body['metadata']['generation']}]")

    logger.info(f"Stats: {pipeline.get_stats()}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
