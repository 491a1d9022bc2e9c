# authkit

Small pieces for building an authentication service in Python.

## What is inside

- `authkit.errors` holds the status errors. `field_violation(field, err)` builds a
  `FieldViolation` from a field name and the text of an error.
  `invalid_argument_error(violations)` returns an `InvalidArgumentError`, whose message
  is "invalid parameters" and whose `code` is 3. It keeps the violations in
  `.violations`. `unauthenticated_error(err)` returns an `UnauthenticatedError` with
  `code` 16 and the message `"unauthorized: <err>"`.
- `authkit.authorization` reads the authorization header.
  `parse_bearer_token(header)` returns the token from a `Bearer <token>` value. The
  scheme is matched without regard to case. `authorize(header, verify)` parses the
  value, calls `verify(token)` and returns what it gives back. A missing or malformed
  header, another scheme, or an exception from `verify` raises `AuthorizationError`.
- `authkit.passwords` checks passwords and accounts. `is_strong_password(password)`
  requires more than 8 and fewer than 64 bytes. The password must hold an upper-case
  letter, a lower-case letter, a digit and one of `!@#$%^&*()`.
  `check_new_password(password, password2)` raises `PasswordError` if the two entries
  differ or the password is weak. Otherwise it returns the password.
  `check_account_status(is_suspended, is_deleted)` raises `AccountError` for a
  suspended or a deleted account.
- `authkit.models` holds the request and profile dataclasses: `UserAuth`,
  `LoginRequest`, `UserProfile`, `PasswordResetRequest`, `NewPasswordRequest`,
  `UpdateUserDetailsRequest`, `UpdatePhoneRequest` and `UpdateImageRequest`.
  - The request classes have a `validate()` method. It returns the object, or raises
    `ValidationError` listing every failed field and rule.
  - `UserAuth.from_dict` and `LoginRequest.from_dict` build an object from decoded
    JSON.
  - `UserProfile.to_dict()` returns the JSON form of a profile.
- `authkit.metadata` reads client details. `extract_metadata(headers, peer_address)`
  returns a `Metadata` with `user_agent` and `client_ip`.
  - A plain `user-agent` header wins over `grpcgateway-user-agent`.
  - The host of the peer address, when given, wins over `x-forwarded-for`.
  - `::1` is reported as `127.0.0.1`.
- `authkit.ratelimit` holds the rate limiters.
  - `TokenBucket(rate, capacity)` has `take_token()`.
  - `ClientRateLimiter(rps, burst)` keeps one bucket per client in `allow(client)`.
    It forgets clients idle for more than `idle_timeout` seconds (default 180) and
    checks for them every `sweep_interval` seconds (default 60), or whenever you call
    `cleanup()`.
  - `IntervalLimiter(rps=10)` allows each client one request per `1 / rps` seconds.
  - Every limiter takes an optional `clock` callable.
- `authkit.requestlog` logs calls through the standard `logging` module, under the
  logger `authkit.requestlog`. The fields go in `extra`.
  - `log_unary_call(handler, method, request)` runs `handler(request)` and logs the
    status code and its name: 0 for success, or the exception's `code` attribute
    (Unknown when there is none). It also logs the duration, then returns the result
    or re-raises the exception.
  - `HttpLogger(app)` is a WSGI middleware. It logs the method, path, status and
    duration of each request. A non-200 response is logged as an error with the last
    body chunk.
- `authkit.posts` holds the posts.
  - `Post` and `Comment` are the records.
  - `MemoryPostCache(expires=5.0)` is an in-process cache with expiring entries.
  - `RedisPostCache` stores posts as JSON in Redis with an expiry. It defaults to
    `localhost:6379`, db 0, and accepts a ready `redis.Redis` client. `get_post`
    returns `None` if the key is absent or Redis fails.
  - `PostHub(cache=None)` holds the feed. `create_post(content)` numbers posts from 1,
    caches them and puts each one on every subscriber queue. `subscribe()` returns a
    `queue.SimpleQueue` preloaded with the posts still in the cache. `unsubscribe(q)`
    removes a subscriber. `live_comments(comments)` records each comment and yields it
    back.

## What it does not do

authkit has no server, routes or command of its own. It does not store users,
sessions or profiles. It does not create or sign access tokens: `authorize` relies on
the `verify` callable you pass in. It sends no e-mail. You put these pieces into your
own application.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest
```

## Examples

Checking a bearer header:

```python
from authkit.authorization import authorize, AuthorizationError

def verify(token):
    if token != "token":
        raise ValueError("unknown token")
    return {"user": "someone@example.com"}

payload = authorize("Bearer token", verify)
```

Validating a login request:

```python
from authkit.models import LoginRequest, ValidationError

password = "password"
request = LoginRequest(email="someone@example.com", password=password)
try:
    request.validate()
except ValidationError as exc:
    print(exc)   # the password fails the strong_password rule
```

Rate limiting by client address:

```python
from authkit.ratelimit import ClientRateLimiter

limiter = ClientRateLimiter(rps=2, burst=4)
if not limiter.allow("203.0.113.7"):
    ...  # respond with 429
```

Logging a WSGI application:

```python
import logging
from authkit.requestlog import HttpLogger

logging.basicConfig(level=logging.INFO)
application = HttpLogger(application)
```

A live post feed:

```python
from authkit.posts import PostHub

hub = PostHub()
feed = hub.subscribe()
post_id = hub.create_post("hello")   # "1"
print(feed.get().content)            # "hello"
hub.unsubscribe(feed)
```

## Running the tests

```
pytest
```