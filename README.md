# zbplugins

This package holds the logic behind a set of chat-bot plugins. It is plain
Python and has no third-party dependencies. Each module covers what one plugin
decides, parses, stores and formats. The package does not connect to any chat
protocol; the caller does that.

## Modules

- `zbplugins.logformat`: `LogFormatter` is a `logging.Formatter` that writes each record as `<colour>[LEVEL] message \n<reset>`. `level_color` gives the ANSI colour for a level, and `TRACE` is a level below `DEBUG`.
- `zbplugins.emojimix`: `match` finds two mixable emoji in a message, given as two segments or as two characters of raw text. `face_to_emoji` maps a text segment or a QQ face segment to a code point. `mix_urls` builds the two candidate Emoji Kitchen URLs. `mix` returns the first of them that answers a HEAD request with 200. You can pass in your own `head` callable.
- `zbplugins.choose`: `choose` splits the options on `还是` and lists them, then picks one.
- `zbplugins.baidu`: `search_url` builds a "let me search that for you" link, or returns `None` for empty text.
- `zbplugins.atri`: ATRI-style replies as lists of `Segment`s. `respond` picks the rule by keyword, hour and whether the message was addressed to the bot. The greeting helpers are `good_morning`, `good_noon` and `good_night`. `atri_awake` is false from 1 to 6 o'clock. `rand_text`, `rand_image` and `rand_record` build the segments.
- `zbplugins.fortune`: daily fortune. `FortuneThemes` keeps a background theme for each group. `seed_for` gives a user's seed for a day. `pick_omikuji` picks a slip from the list you supply. `glyph_positions` lays out text in vertical columns, using the helpers `offset` and `rows_num`.
- `zbplugins.chat`: `AirConditioner` is a pretend air conditioner for each group. `PokeLimiter` is a token-bucket limiter that decides how to answer a poke. `name_reply` gives the answer when someone calls the bot by name.
- `zbplugins.aireply`: `ReplyModes` chooses the reply service for each session and `TTSModes` chooses the voice. `session_id` uses the group id, or the negated user id in a private chat.
- `zbplugins.epidemic`: `parse_epidemic` parses the feed into `Area` trees. `find_city` searches a tree depth first. `format_report` formats the result. `query_epidemic` fetches the feed and looks up a city. You can pass in your own `fetch` callable.
- `zbplugins.github`: `search_repo` returns the best matching repository. `format_repo` formats it in one of three modes: `"-p "` for the image only, `"-t "` for the text only, or anything else for both. `net_get` raises `HTTPStatusError` when the status is not 200. `not_null` returns a default for empty text.
- `zbplugins.driftbottle`: `Sea` stores drift bottles in SQLite, one table per channel. `Bottle` is a bottle whose id is a CRC-64/ISO checksum, computed by `crc64_iso` and `bottle_id`. `parse_throw` and `parse_fetch` parse the commands.
- `zbplugins.chouxianghua`: `PinyinDB` translates text into "abstract speech" through a pinyin table and an emoji table. It tries pairs of characters first, then single characters.
- `zbplugins.diana`: `TextStore` stores essays, keyed by `text_id`. `full_match` matches a command in message segments. `format_zhiwang` formats a duplicate-check report, and `check_duplicate` queries the checking service.
- `zbplugins.quotes`: `QuoteDB` returns random curses, CP stories, jokes, book reviews and picture URLs. `fill_cp_story` puts names into a story, and `split_cp_names` splits the two names out of the arguments.
- `zbplugins.bilibili_store`: `PushStore` holds `Subscription`s and uploader names in SQLite.
- `zbplugins.bilibili_push`: `format_card` formats dynamic cards, `format_live` formats live notices and `format_push_list` formats subscription lists. `DynamicTracker` and `LiveTracker` decide what is new. `error_message` explains an account lookup status.

## Example

```python
import random
from zbplugins.choose import choose
from zbplugins.emojimix import mix_urls

print(choose("可口可乐还是百事可乐", "Alice", random.Random(1)))
print(mix_urls(ord("😀"), ord("🐷")))
```

## What it does not do

- There is no bot and no command to start one. Message routing, permissions and sending are the caller's job.
- The SQLite stores (`QuoteDB`, `PinyinDB`, `TextStore`, `Sea`, `PushStore`) create empty tables. The package ships no data to fill them.
- `zbplugins.fortune` does not draw the fortune image. It only computes where the glyphs go. It also ships no slips or backgrounds.
- `zbplugins.aireply` only records which reply service and voice each session uses. It does not call any AI service and does not synthesise speech.
- `zbplugins.bilibili_push` does not fetch anything itself. You supply the API responses, and the trackers and formatters work on them.

## Tests

```
pip install -e .[test]
pytest
```