# cetatenie

A Telegram bot that checks Romanian citizenship reacquisition files
(`[number]/RD/[year]`, for example `123/RD/2023`) against the yearly
decree PDFs that the citizenship authority publishes.

A user sends a file number to the bot. The bot downloads the PDF for that
year, or takes it from a 24-hour in-memory cache, and searches it page by page
for the number. It then replies with one of three results:

- **found and resolved**: `/P/` appears within 43 characters of where the number starts.
- **found but not resolved**: the reply carries a button that subscribes the chat to notifications.
- **not found**.

Subscriptions are kept in a SQLite database. The checker goes over every
subscription when the program starts and again every 24 hours. For a resolved
file it notifies the chat and removes the subscription. For a file that cannot
be found it notifies the chat and keeps the subscription.

## Installation

```
pip install .
```

## Configuration

The bot reads its token from the `TELEGRAM_BOT_TOKEN` environment variable.
On start it loads a `.env` file from the working directory, if there is one:

```
TELEGRAM_BOT_TOKEN=token
```

If the token is missing, the program prints an error and exits with status 1.

## Running

```
cetatenie
cetatenie --db /path/to/subscriptions.db
```

`--db` sets the SQLite database file. The default is `./data.db`.
The bot receives updates by long polling. Stop it with Ctrl+C or SIGTERM.

## Bot commands

| Command | Meaning |
| --- | --- |
| `/start` | Welcome message |
| `/ajutor` | Help |
| `/abonamente` | List your subscriptions |
| `/adauga <number>` | Subscribe to a file |
| `/sterge <number>` | Remove a subscription |
| `/sterge_toate` | Remove all your subscriptions |

Any other message must be a file number of the form `[1–5 digits]/RD/[4 digits]`.
Reports are available for the years 2020 to 2025.

## Library use

The parts can also be used on their own:

- `cetatenie.decree.get_year(search)` checks a file number and returns its year.
  It raises `DecreeFormatError` for a malformed number.
- `cetatenie.decree.read_pdf(data, search)` searches PDF bytes you already have and returns a `FindState`.
- `cetatenie.pdftext.extract_pages(data)` returns the plain text of each page.
- `cetatenie.fetcher.FileFetcher` downloads a year's report. It makes up to 3 attempts and caches the result.
- `cetatenie.processor.DecreeProcessor.handle(search)` fetches and searches.
  It returns the state and a `TimeReport`, and raises `DecreeError` on failure.
- `cetatenie.database.init_db(path)` opens the database.
  `cetatenie.database.SubscriptionStore` creates, lists and removes subscriptions.
- `cetatenie.checker.SubscriptionChecker` runs one pass over all subscriptions.
- `cetatenie.telegram.TelegramApi` is a small Bot API client. `cetatenie.bot.Bot` handles updates.

## Limitations

- PDF text extraction supports uncompressed and `FlateDecode` streams only.
  It reads string bytes as Latin-1, or as UTF-16 when they begin with a byte-order mark.
  Font encodings and `ToUnicode` maps are not applied.
- A decree number can be stored only once in the database. If a second chat
  subscribes to a number that another chat already follows, that chat gets the
  "error adding subscription" reply.
- Reports are downloaded without TLS certificate verification.
- The cache lives in memory and is lost when the program stops.

## Tests

```
pip install .[test]
pytest
```