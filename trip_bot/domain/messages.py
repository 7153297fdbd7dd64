"""User-facing texts, keyed by screen.

The bot speaks Burmese to its single operator; button labels and error
prefixes stay in English as the operator is used to them.
"""

MESSAGES = {
    "NOT_AUTHORIZED": "❌ You are not authorized to use this bot.",
    "WELCOME": "မဂ်လာပါ MGY မှကြိုဆိုပါတယ်။ သင့်ရဲ့ Data တွေကို တင်နိုင်ပါပြီ။",
    "ASK_DRIVER_NAME": "Driver နာမည် ထည့်သွင်းပါ။",
    "ASK_FROM_LOCATION": "စတင်ထွက်ခွာသည့်နေရာကို ထည့်သွင်းပါ။",
    "ASK_TO_LOCATION": "သွားမည့်နေရာကို ထည့်သွင်းပါ။",
    "ASK_AMOUNT": "ခရီးအတွက် ကျသင့်ငွေကို ထည့်သွင်းပါ။",
    "PLEASE_START": "Please start with /start command",
    "CONFIRM_SUMMARY": (
        "ဤအချက်အလက်များကို တင်မည်။\n\n"
        "Driver အမည် - {driverName}\n"
        "နေ့ရက် - {date}\n"
        "အချိန် - {time}\n"
        "စတင်ထွက်ခွာသည့်နေရာ - {fromLocation}\n"
        "သွားမည့်နေရာ - {toLocation}\n"
        "ကျသင့်ငွေ - {amount}"
    ),
    "CANCELLED": "ပယ်ဖျက်ခြင်း အောင်မြင်ပါသည်",
    "POST_SUCCESS": "Post တင်ခြင်းအောင်မြင်ပါသည်",
    "POST_FAILED": "Post တင်ခြင်း မအောင်မြင်ပါ။\nError : {error}",
    "ERROR_OCCURRED": "Error occurred: {error}",
    "HELP": (
        "/start - စတင်ရန်\n"
        "/newpost - Data အသစ်တင်ရန်\n"
        "/delete - လက်ရှိ Data ကို ပယ်ဖျက်ရန်"
    ),
}

BUTTON_LABELS = {
    "NEW_POST_WELCOME": "တင်မယ်",
    "NEW_POST": "New Post",
    "CONFIRM_NO": "No🚫",
    "CONFIRM_YES": "Yes✅",
    "RETRY": "♻ Retry",
    "DELETE": "🗑 Delete",
}


def t(key: str, **params) -> str:
    text = MESSAGES[key]
    return text.format(**params) if params else text
