# triagekit

Building blocks for a bot that helps triage issues and pull requests. The
package works on plain data: strings, dictionaries and dataclasses. It
uses only the standard library.

| Module | What it does |
| --- | --- |
| `triagekit.payload` | HMAC-SHA1 webhook signatures |
| `triagekit.patterns` | glob patterns for label names |
| `triagekit.relabel` | who may set which labels |
| `triagekit.interactions` | comment texts and bot-managed sections of an issue body |
| `triagekit.notes` | summary notes kept in an issue body |
| `triagekit.zulip_topics` | chat topic names and message templates |
| `triagekit.shortcut` | status-label shortcuts for pull requests |
| `triagekit.team` | team names and their labels |
| `triagekit.events` | event names, payload decoding, handler errors |
| `triagekit.notification_listing` | HTML page of pending notifications |
| `triagekit.rfcbot` | final-comment-period records |
| `triagekit.rustc_commits` | build-completion comments and merge commit messages |
| `triagekit.triage` | staleness colours for open pull requests |
| `triagekit.meetings` | meetings read from a calendar API |
| `triagekit.server` | a WSGI application that receives webhooks |

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Running the webhook server

```
triagekit-server
```

This runs `triagekit.server.main`, which serves a `WebhookApp` with the
standard library's `wsgiref` server. Options:

- `--host` (default `0.0.0.0`)
- `--port` (default: the `PORT` environment variable, else `8000`)

The log level is taken from `LOG_LEVEL` (default `INFO`). The secret used to
check signatures is read from `GITHUB_WEBHOOK_SECRET`.

The application answers:

- `GET /` with `Triagebot is awaiting triage.`
- `/github-hook`, which only accepts `POST` (otherwise `405` with
  `Allow: POST`). It requires the `X-GitHub-Event` and `X-Hub-Signature`
  headers (`400` if either is missing or not UTF-8), checks the signature
  (`403 Wrong signature`), requires a UTF-8 body (`400`), then calls the
  webhook callable. It replies `processed request` or `ignored request`, or
  `500` with `request failed: ...` if the callable raises.
- any other path with `404`.

Every response carries an `X-Request-Id` header.

To embed the application in another WSGI server, build it yourself:

```python
from triagekit.events import EventName
from triagekit.server import WebhookApp

def on_event(event: EventName, payload: str) -> bool:
    ...
    return True

app = WebhookApp(secret="secret", webhook=on_event)
```

Without a callable, the application accepts any known event whose payload is
valid JSON and ignores events of kind `EventName.OTHER`.

## Webhook signatures

`triagekit.payload.sign(secret, payload)` returns `sha1=<hex>` for a body.
`assert_signed(signature, payload, secret)` raises `SignedPayloadError` when
the signature does not match; with no secret it reads
`GITHUB_WEBHOOK_SECRET` and raises `RuntimeError` if that is unset.

## Label permissions

`triagekit.relabel.check_filter(label, config, is_member)` returns a
`CheckFilterResult`. Team members (`TeamMembership.MEMBER`) may set any
label. For everyone else the label must match a pattern in
`RelabelConfig.allow_unauthenticated`; a pattern starting with `!` denies
what it matches and overrides earlier allows. A refusal is `DENY` for an
outsider and `DENY_UNKNOWN` when membership is unknown. An invalid pattern
raises `ValueError`. `match_pattern(pattern, label)` gives the
`MatchPatternResult` for one pattern.

`triagekit.patterns.GlobPattern` supports `?`, `*`, `**` and `[...]`
classes (`[!...]` negated); an invalid pattern raises `PatternError`.
`compile_patterns` compiles a list, logging and skipping invalid ones.

## Bot sections in an issue body

`triagekit.interactions.EditIssueBody(body, id)` works on the text of an
issue body. `current()` returns the section owned under `id`,
`current_data()` the JSON data stored in it (or `None`), and
`apply(text, data)` returns the new body with the section added, replaced,
or removed when it becomes empty. `normalize_body` turns CRLF into LF.
`error_comment_body(message)` and `ping_comment_body(users)` build comment
texts.

## Summary notes

`triagekit.notes.NoteData` keeps `NoteDataEntry` items keyed by comment URL.
`add_summary` adds or retitles an entry, `remove_by_title` drops one,
`to_markdown` renders the "Summary Notes" section in URL order, and
`to_json` / `NoteData.from_json` round-trip the stored data.

## Chat topics and messages

Topics are limited to 60 characters. `topic_from_issue(title,
topic_reference)` shortens a title so the reference fits, `truncate_topic`
cuts a topic to 59 characters plus `…`, and `fill_template` substitutes
`{number}` and `{title}`. `has_all_required_labels(labels,
required_labels)` checks glob requirements. `NotificationType` names the
triggering change.

## Other helpers

- `triagekit.shortcut.status_label_changes(command, labels)` returns the
  status labels to remove and add for a `ShortcutCommand`.
- `triagekit.team.parse_team(text)` returns a `Team`; `Team.label()` gives
  its `T-...` label.
- `triagekit.events`: `parse_event_name`, `deserialize_payload` (raises
  `PayloadError`), the `HandlerMessage` / `HandlerFailure` errors and
  `summarize_errors`, plus `feature_disabled_message` and
  `command_parse_failure_message`.
- `triagekit.notification_listing.render(user, notifications)` builds the
  HTML page for a list of `Notification` records.
- `triagekit.rfcbot`: `FullFCP.from_dict`, `index_fcps`, and
  `get_all_fcps(url)`, which fetches and indexes records from a URL.
- `triagekit.rustc_commits`: `extract_bors_message(body)` and
  `pr_number_from_merge_message(message)`.
- `triagekit.triage`: `need_triage(updated_at, now)` gives `red`, `yellow`
  or `green`; `days_since_update(updated_at, created_at, now)`.
- `triagekit.meetings`: `calendar_url` and `get_meetings(start_date,
  end_date, api_key)`, which returns an empty list when no key is given and
  `GOOGLE_API_KEY` is unset.

## What the package does not do

It does not talk to a code-hosting service's API: it does not post
comments, edit issue bodies, set labels, assignees or milestones, or read
diffs. It has no database, so notifications and commits are not stored. It
does not parse bot commands out of comments or send chat messages. The
server's default webhook only validates payloads; acting on events is up to
the callable passed to `WebhookApp`.