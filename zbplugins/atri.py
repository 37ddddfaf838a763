"""Canned replies of the ATRI persona, chosen by keyword and time of day."""

from __future__ import annotations

import random
from dataclasses import dataclass

RES = "https://gitcode.net/u011570312/zbpdata/-/raw/main/Atri/"


@dataclass(frozen=True)
class Segment:
    """One piece of an outgoing message.

    ``kind`` is ``"text"``, ``"image"``, ``"record"`` or ``"reply"``; a reply
    segment quotes the message that triggered the answer and has empty data.
    """

    kind: str
    data: str = ""


REPLY = Segment("reply")

_SLEEP_TALK = (
    "zzzz......", "zzzzzzzz......", "zzz...好涩哦..zzz....",
    "别...不要..zzz..那..zzz..", "嘻嘻..zzz..呐~..zzzz..", "...zzz....哧溜哧溜....",
)

_NOON = (
    "午安w", "午觉要好好睡哦，ATRI会陪伴在你身旁的w",
    "嗯哼哼~睡吧，就像平常一样安眠吧~o(≧▽≦)o", "睡你午觉去！哼唧！！",
)

_MORNING_EARLY = (
    "啊......早上好...(哈欠)", "唔......吧唧...早上...哈啊啊~~~\n早上好......",
    "早上好......", "早上好呜......呼啊啊~~~~",
    "啊......早上好。\n昨晚也很激情呢！", "吧唧吧唧......怎么了...已经早上了么...",
    "早上好！", "......看起来像是傍晚，其实已经早上了吗？",
    "早上好......欸~~~脸好近呢",
)

_MORNING_LATE = (
    "哼！这个点还早啥，昨晚干啥去了！？", "熬夜了对吧熬夜了对吧熬夜了对吧？？？！",
    "是不是熬夜是不是熬夜是不是熬夜？！",
)

_MORNING_EVENING = ("早个啥？哼唧！我都准备洗洗睡了！", "不是...你看看几点了，哼！", "晚上好哇")

_NIGHT_MORNING = (
    "你可猝死算了吧！", "？啊这", "亲，这边建议赶快去睡觉呢~~~",
    "不可忍不可忍不可忍！！为何这还不猝死！！",
)

_NIGHT_AFTERNOON = (
    "难不成？？晚上不想睡觉？？现在休息", "就......挺离谱的...现在睡觉",
    "现在还是白天哦，睡觉还太早了",
)

_NIGHT_EVENING = (
    "嗯哼哼~睡吧，就像平常一样安眠吧~o(≧▽≦)o", "......(打瞌睡)",
    "呼...呼...已经睡着了哦~...呼......", "......我、我会在这守着你的，请务必好好睡着",
)

_HIGH_PERFORMANCE = (
    "当然，我是高性能的嘛~！", "小事一桩，我是高性能的嘛", "怎么样？还是我比较高性能吧？",
    "哼哼！我果然是高性能的呢！", "因为我是高性能的嘛！嗯哼！", "因为我是高性能的呢！",
    "哎呀~，我可真是太高性能了", "正是，因为我是高性能的", "是的。我是高性能的嘛♪",
    "毕竟我可是高性能的！", "嘿嘿，我的高性能发挥出来啦♪", "我果然是很高性能的机器人吧！",
    "是吧！谁叫我这么高性能呢！哼哼！", "交给我吧，有高性能的我陪着呢",
    "呣......我的高性能，毫无遗憾地施展出来了......",
)

_NO_PROBLEM = (
    "当然，我是高性能的嘛~！", "没事没事，因为我是高性能的嘛！嗯哼！",
    "没事的，因为我是高性能的呢！", "正是，因为我是高性能的",
    "是的。我是高性能的嘛♪", "毕竟我可是高性能的！",
    "那种程度的事不算什么的。\n别看我这样，我可是高性能的", "没问题的，我可是高性能的",
)

_QUESTION = ("?", "？", "嗯？", "(。´・ω・)ん?", "ん？")
_ROBOT_INSULT = ("萝卜子是对机器人的蔑称！", "是亚托莉......萝卜子可是对机器人的蔑称")
_NOT_ALLOWED = ("不许好！", "憋回去！")
_CANNOT_PROMISE = ("我无法回应你的请求",)

_LOVE_IMAGES = ("SUKI.jpg", "SUKI1.jpg", "SUKI2.png")
_ANGRY_IMAGES = ("FN.jpg", "WQ.jpg", "WQ1.jpg")
_ANSWER_IMAGES = ("YES.png", "NO.jpg")
_SPEECHLESS_IMAGES = ("AZ.jpg", "AZ1.jpg")
_PUZZLED_IMAGES = ("WH.jpg", "WH1.jpg", "WH2.jpg", "WH3.jpg")

LOVE_WORDS = frozenset(
    ("喜欢", "爱你", "爱", "suki", "daisuki", "すき", "好き", "贴贴", "老婆", "亲一个", "mua")
)
CURSE_WORDS = (
    "草你妈", "操你妈", "脑瘫", "废柴", "fw", "five", "废物", "战斗", "爬", "爪巴", "sb", "SB", "傻B",
)
MORNING_WORDS = frozenset(
    ("早安", "早哇", "早上好", "ohayo", "哦哈哟", "お早う", "早好", "早", "早早早")
)
NOON_WORDS = frozenset(("中午好", "午安", "午好"))
NIGHT_WORDS = frozenset(("晚安", "oyasuminasai", "おやすみなさい", "晚好", "晚上好"))
PRAISE_WORDS = ("高性能", "太棒了", "すごい", "sugoi", "斯国一", "よかった")
COMFORT_WORDS = ("没事", "没关系", "大丈夫", "还好", "不要紧", "没出大问题", "没伤到哪")
ASK_WORDS = ("好吗", "是吗", "行不行", "能不能", "可不可以")
QUESTION_MARKS = frozenset(("？", "?", "¿"))


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def rand_text(*args: str, rng: random.Random | None = None) -> Segment:
    """Return a text segment holding one of ``args``."""
    return Segment("text", _rng(rng).choice(args))


def rand_image(*args: str, rng: random.Random | None = None) -> Segment:
    """Return an image segment for one of the resource files ``args``."""
    return Segment("image", RES + _rng(rng).choice(args))


def rand_record(*args: str, rng: random.Random | None = None) -> Segment:
    """Return a voice record segment for one of the resource files ``args``."""
    return Segment("record", RES + _rng(rng).choice(args))


def atri_awake(hour: int) -> bool:
    """Return False from 1 to 6 o'clock, when ATRI sleeps and answers nothing."""
    return not 1 <= hour < 6


def good_morning(hour: int, rng: random.Random | None = None) -> Segment:
    """Return the answer to a morning greeting at ``hour``."""
    if hour < 6:
        pool = _SLEEP_TALK
    elif hour < 9:
        pool = _MORNING_EARLY
    elif hour < 18:
        pool = _MORNING_LATE
    else:
        pool = _MORNING_EVENING
    return rand_text(*pool, rng=rng)


def good_noon(hour: int, rng: random.Random | None = None) -> Segment | None:
    """Return the answer to a noon greeting, or None outside noon hours."""
    if 11 < hour < 15:
        return rand_text(*_NOON, rng=rng)
    return None


def good_night(hour: int, rng: random.Random | None = None) -> Segment:
    """Return the answer to a good-night greeting at ``hour``."""
    if hour < 6:
        pool = _SLEEP_TALK
    elif hour < 11:
        pool = _NIGHT_MORNING
    elif hour < 15:
        pool = _NOON
    elif hour < 19:
        pool = _NIGHT_AFTERNOON
    else:
        pool = _NIGHT_EVENING
    return rand_text(*pool, rng=rng)


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


def _puzzled(rng: random.Random, images: tuple[str, ...]) -> list[Segment]:
    roll = rng.randrange(5)
    if roll == 0:
        return [rand_text(*_QUESTION, rng=rng)]
    if roll in (1, 2):
        return [rand_image(*images, rng=rng)]
    return []


def _maybe_image(rng: random.Random, images: tuple[str, ...]) -> list[Segment]:
    return [rand_image(*images, rng=rng)] if rng.randrange(2) == 0 else []


def respond(
    text: str, hour: int, to_me: bool = False, rng: random.Random | None = None
) -> list[Segment] | None:
    """Return ATRI's answer to ``text``.

    None means no rule took the message; an empty list means a rule took it
    but chose to stay silent.
    """
    rng = _rng(rng)
    awake = atri_awake(hour)

    if text == "萝卜子" and awake:
        if rng.randrange(2) == 0:
            return [rand_text(*_ROBOT_INSULT, rng=rng)]
        return [rand_record("RocketPunch.amr", rng=rng)]
    if text in LOVE_WORDS and awake and to_me:
        return [rand_image(*_LOVE_IMAGES, rng=rng)]
    if _contains_any(text, CURSE_WORDS) and awake and to_me:
        return [rand_image(*_ANGRY_IMAGES, rng=rng)]
    if text in MORNING_WORDS:
        return [REPLY, good_morning(hour, rng)]
    if text in NOON_WORDS:
        answer = good_noon(hour, rng)
        return [REPLY, answer] if answer is not None else []
    if text in NIGHT_WORDS:
        return [REPLY, good_night(hour, rng)]
    if not awake:
        return None
    if _contains_any(text, PRAISE_WORDS) and to_me:
        return [rand_text(*_HIGH_PERFORMANCE, rng=rng)]
    if _contains_any(text, COMFORT_WORDS) and to_me:
        return [rand_text(*_NO_PROBLEM, rng=rng)]
    if _contains_any(text, ASK_WORDS):
        return _maybe_image(rng, _ANSWER_IMAGES)
    if "啊这" in text:
        return _maybe_image(rng, _SPEECHLESS_IMAGES)
    if "我好了" in text:
        return [REPLY, rand_text(*_NOT_ALLOWED, rng=rng)]
    if text in QUESTION_MARKS:
        return _puzzled(rng, _PUZZLED_IMAGES)
    if "离谱" in text:
        return _puzzled(rng, _PUZZLED_IMAGES[:1])
    if "答应我" in text and to_me:
        return [rand_text(*_CANNOT_PROMISE, rng=rng)]
    return None