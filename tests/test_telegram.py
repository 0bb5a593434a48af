import json

import httpx
import pytest

from cetatenie.telegram import TelegramApi, TelegramError


def make_api(responder):
    seen = []

    def handler(request):
        seen.append(request)
        return responder(request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return TelegramApi("token", client), seen


def ok(result):
    return lambda request: httpx.Response(200, json={"ok": True, "result": result})


def test_send_message_request():
    api, seen = make_api(ok({"message_id": 1}))
    result = api.send_message(42, "hello")
    assert result == {"message_id": 1}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/bottoken/sendMessage"
    body = json.loads(seen[0].content)
    assert body == {"chat_id": 42, "text": "hello", "parse_mode": "HTML"}


def test_send_message_with_reply_markup():
    api, seen = make_api(ok({"message_id": 2}))
    markup = {"inline_keyboard": [[{"text": "a", "callback_data": "b"}]]}
    api.send_message(7, "hi", markup)
    body = json.loads(seen[0].content)
    assert body["reply_markup"] == markup


def test_set_my_commands_request():
    api, seen = make_api(ok(True))
    commands = [{"command": "start", "description": "d"}]
    assert api.set_my_commands(commands, "ro") is True
    assert seen[0].url.path == "/bottoken/setMyCommands"
    body = json.loads(seen[0].content)
    assert body == {"commands": commands, "scope": {"type": "default"}, "language_code": "ro"}


def test_get_updates_with_offset():
    updates = [{"update_id": 5, "message": {"text": "x"}}]
    api, seen = make_api(ok(updates))
    assert api.get_updates(5, 10) == updates
    body = json.loads(seen[0].content)
    assert body == {"offset": 5, "timeout": 10}


def test_get_updates_without_offset():
    api, seen = make_api(ok([]))
    assert api.get_updates() == []
    body = json.loads(seen[0].content)
    assert "offset" not in body


def test_answer_callback_query():
    api, seen = make_api(ok(True))
    api.answer_callback_query("abc")
    assert seen[0].url.path == "/bottoken/answerCallbackQuery"
    assert json.loads(seen[0].content) == {"callback_query_id": "abc"}


def test_api_error_is_raised():
    api, _ = make_api(
        lambda request: httpx.Response(
            400, json={"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}
        )
    )
    with pytest.raises(TelegramError) as info:
        api.send_message(1, "x")
    assert info.value.error_code == 400
    assert "chat not found" in str(info.value)


def test_invalid_json_is_raised():
    api, _ = make_api(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))
    with pytest.raises(TelegramError) as info:
        api.get_updates()
    assert info.value.error_code == 502


def test_transport_error_is_raised():
    def fail(request):
        raise httpx.ConnectError("refused", request=request)

    api, _ = make_api(fail)
    with pytest.raises(TelegramError, match="sendMessage request failed"):
        api.send_message(1, "x")


def test_empty_token_rejected():
    with pytest.raises(TelegramError):
        TelegramApi("")