"""Chat companion routes: reply, transcript, greeting."""

import asyncio
import time

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from chat.companion import ChatCompanion, ChatError
from chat.greeting import generate_greeting
from chat.history import ChatHistoryStore
from chat.tools import MoodToolRegistry
from llm import LLMError, LLMProvider
from moods.storage import MoodStore
from web.auth import get_current_user
from web.deps import get_chat_store, get_config, get_db_path, get_fast_llm, get_llm, get_mood_store
from web.models import ActionResponse, ChatMessageOut, ChatRequest, ChatResponse, GreetingResponse
from web.user_store import log_event

logger = structlog.get_logger()

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(
    body: ChatRequest,
    user: dict = Depends(get_current_user),
    llm: LLMProvider = Depends(get_llm),
    mood_store: MoodStore = Depends(get_mood_store),
    history_store: ChatHistoryStore = Depends(get_chat_store),
):
    config = get_config()
    user_id = user["id"]

    if body.session_history is not None:
        history = [t.model_dump(mode="json") for t in body.session_history]
    else:
        history = [m.to_prompt() for m in history_store.fetch(user_id, config.chat.history_limit)]

    companion = ChatCompanion(
        llm,
        MoodToolRegistry(mood_store, user_id),
        user_name=user.get("name"),
        max_iterations=config.chat.max_iterations,
        max_tokens=config.chat.max_tokens,
    )

    start = time.monotonic()
    try:
        answer = await asyncio.to_thread(companion.respond, body.message, history)
    except (LLMError, ChatError) as e:
        logger.error("chat.reply_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e))

    if body.save:
        saved = history_store.add_exchange(user_id, body.message, answer)
        if not saved.success:
            logger.warning("chat.save_failed", user_id=user_id, error=saved.error)
    log_event("chat_query", user_id, get_db_path(), {"latency_ms": int((time.monotonic() - start) * 1000)})
    return ChatResponse(response=answer)


@router.get("/history", response_model=list[ChatMessageOut])
async def get_history(
    limit: int | None = Query(None, ge=1, le=200),
    user: dict = Depends(get_current_user),
    history_store: ChatHistoryStore = Depends(get_chat_store),
):
    messages = history_store.fetch(user["id"], limit or get_config().chat.history_limit)
    return [
        ChatMessageOut(id=m.id, role=m.role, content=m.content, timestamp=m.timestamp)
        for m in messages
    ]


@router.delete("/history", response_model=ActionResponse)
async def clear_history(
    user: dict = Depends(get_current_user),
    history_store: ChatHistoryStore = Depends(get_chat_store),
):
    result = history_store.delete_all(user["id"])
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)
    return ActionResponse(success=True, message=result.message, deleted=result.deleted)


@router.get("/greeting", response_model=GreetingResponse)
async def get_greeting(
    user: dict = Depends(get_current_user),
    llm: LLMProvider = Depends(get_fast_llm),
    history_store: ChatHistoryStore = Depends(get_chat_store),
):
    greeting = await asyncio.to_thread(
        generate_greeting,
        llm,
        history_store,
        user["id"],
        user.get("name"),
        get_config().chat.greeting_history,
    )
    return GreetingResponse(greeting=greeting)
