"""Update builders and call inspectors shared by the test modules."""

from datetime import datetime

ALLOWED_CHAT = "424242"
STRANGER_CHAT = "999"
FIXED_NOW = datetime(2025, 3, 7, 14, 5)


def sent_texts(telegram) -> list:
    return [c.args[1] for c in telegram.send_message.await_args_list]


def last_markup(telegram):
    call = telegram.send_message.await_args_list[-1]
    if len(call.args) > 2:
        return call.args[2]
    return call.kwargs.get("reply_markup")


def callback_tokens(markup) -> list:
    return [button["callback_data"] for row in markup["inline_keyboard"] for button in row]


def text_update(chat_id, text, update_id=1) -> dict:
    return {
        "update_id": update_id,
        "message": {"message_id": update_id, "chat": {"id": int(chat_id)}, "text": text},
    }


def callback_update(chat_id, data, update_id=1, callback_id="cb-1") -> dict:
    return {
        "update_id": update_id,
        "callback_query": {
            "id": callback_id,
            "data": data,
            "message": {"message_id": 7, "chat": {"id": int(chat_id)}},
        },
    }
