"""Tests for chat companion routes."""

import sqlite3

from llm.base import GenerateResponse, LLMError, ToolCall


def test_chat_reply_saved(client, auth_headers, mock_llm):
    mock_llm.generate_with_tools.return_value = GenerateResponse(content="I'm here for you.")

    res = client.post("/api/chat", headers=auth_headers, json={"message": "Rough day"})

    assert res.status_code == 200
    assert res.json() == {"response": "I'm here for you."}
    history = client.get("/api/chat/history", headers=auth_headers).json()
    assert [(m["role"], m["content"]) for m in history] == [
        ("user", "Rough day"),
        ("assistant", "I'm here for you."),
    ]


def test_chat_uses_stored_history(client, auth_headers, mock_llm):
    client.post("/api/chat", headers=auth_headers, json={"message": "first"})
    client.post("/api/chat", headers=auth_headers, json={"message": "second"})

    messages = mock_llm.generate_with_tools.call_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["first", "Mocked reply", "second"]


def test_chat_session_history_without_saving(client, auth_headers, mock_llm):
    res = client.post(
        "/api/chat",
        headers=auth_headers,
        json={
            "message": "and now?",
            "session_history": [{"role": "user", "content": "earlier"}],
            "save": False,
        },
    )
    assert res.status_code == 200
    messages = mock_llm.generate_with_tools.call_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["earlier", "and now?"]
    assert client.get("/api/chat/history", headers=auth_headers).json() == []


def test_chat_tool_call_reads_callers_moods(client, auth_headers, auth_headers_b, mock_llm):
    client.post("/api/moods", headers=auth_headers_b, json={"mood": "awful", "date": _today()})
    mock_llm.generate_with_tools.side_effect = [
        GenerateResponse(
            content=None,
            tool_calls=[ToolCall(id="c1", name="get_user_mood_analysis", arguments={"time_range": "last7days"})],
            finish_reason="tool_calls",
        ),
        GenerateResponse(content="You haven't logged any moods this week."),
    ]

    res = client.post("/api/chat", headers=auth_headers, json={"message": "How am I doing?"})

    assert res.status_code == 200
    tool_msg = mock_llm.generate_with_tools.call_args.kwargs["messages"][-1]
    assert tool_msg["role"] == "tool"
    assert '"is_empty": true' in tool_msg["content"]


def test_chat_llm_failure(client, auth_headers, mock_llm):
    mock_llm.generate_with_tools.side_effect = LLMError("Gemini rate limit")
    res = client.post("/api/chat", headers=auth_headers, json={"message": "hi"})
    assert res.status_code == 502
    assert client.get("/api/chat/history", headers=auth_headers).json() == []


def test_chat_empty_reply(client, auth_headers, mock_llm):
    mock_llm.generate_with_tools.return_value = GenerateResponse(content="")
    res = client.post("/api/chat", headers=auth_headers, json={"message": "hi"})
    assert res.status_code == 502
    assert "empty response" in res.json()["detail"]


def test_chat_rejects_empty_message(client, auth_headers):
    res = client.post("/api/chat", headers=auth_headers, json={"message": ""})
    assert res.status_code == 422


def test_clear_history(client, auth_headers, auth_headers_b):
    client.post("/api/chat", headers=auth_headers, json={"message": "hi"})
    client.post("/api/chat", headers=auth_headers_b, json={"message": "hello"})

    res = client.delete("/api/chat/history", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["deleted"] == 2
    assert client.get("/api/chat/history", headers=auth_headers).json() == []
    assert len(client.get("/api/chat/history", headers=auth_headers_b).json()) == 2


def test_greeting(client, auth_headers, mock_llm):
    mock_llm.generate.return_value = "Welcome back, Test!"
    res = client.get("/api/chat/greeting", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"greeting": "Welcome back, Test!"}


def test_greeting_falls_back(client, auth_headers, mock_llm):
    mock_llm.generate.side_effect = LLMError("down")
    res = client.get("/api/chat/greeting", headers=auth_headers)
    assert res.json()["greeting"].startswith("Hello, Test!")


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def _today():
    from moods.dates import utc_today

    return utc_today().isoformat()


def test_reply_kept_when_exchange_not_saved(client, auth_headers, mock_llm, app_config):
    client.get("/api/chat/history", headers=auth_headers)
    conn = sqlite3.connect(app_config.paths.db_path)
    conn.execute(
        """CREATE TRIGGER block_assistant BEFORE INSERT ON chat_messages
        WHEN NEW.role = 'assistant' BEGIN SELECT RAISE(ABORT, 'blocked'); END"""
    )
    conn.commit()
    conn.close()
    mock_llm.generate_with_tools.return_value = GenerateResponse(content="Tell me more.")

    res = client.post("/api/chat", headers=auth_headers, json={"message": "Rough day"})

    assert res.status_code == 200
    assert res.json() == {"response": "Tell me more."}
    assert client.get("/api/chat/history", headers=auth_headers).json() == []
