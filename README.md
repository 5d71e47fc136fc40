# dbpack

Helpers for code that reads and writes MySQL wire-protocol data: value
codecs, date/time conversion, reserved-word quoting and small SQL text
utilities. There are no dependencies outside the standard library.

## Modules

- `dbpack.codec`: length-encoded integers and strings, little-endian
  16/32/64-bit integers, and NUL-terminated and end-of-buffer strings.
  Encoders return `bytes`. Decoders take `(data, pos)` and return
  `(value, next_pos)`. A read that runs past the end of the data raises
  `DecodeError`, which is a subclass of `ValueError`.
- `dbpack.values`: length-encoded values as they appear in result rows.
  `read_length_encoded_integer`, `read_length_encoded_string` and
  `skip_length_encoded_string` handle the `0xFB` NULL marker and return
  `(value, is_null, bytes_read)`. The module also has `read_bool`,
  `uint64_to_bytes`, `uint64_to_string`, `string_to_int`,
  `append_length_encoded_integer`, `random_buf`, and a thread-safe TLS
  configuration registry (`register_tls_config`, `deregister_tls_config`,
  `get_tls_config`). The registry rejects keys that read as booleans, and
  the keys `skip-verify` and `preferred`.
- `dbpack.datetimes`: `parse_date_time` reads text `DATE`/`DATETIME` values.
  `parse_binary_date_time` decodes binary ones. `format_date_time`,
  `format_binary_date_time` and `format_binary_time` produce text. The
  all-zero date comes back as `None`. Fields that are out of range roll over
  into the next larger field.
- `dbpack.keywords`: `MYSQL_KEYWORDS`, `is_keyword`, `check_escape` and
  `quote_if_keyword`. Matching ignores case.
- `dbpack.sqltext`: `mysql_in_params` and `pgsql_in_params` build `IN (...)`
  placeholder lists. `generate_xid` and `get_transaction_id` build and read
  global transaction ids.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from dbpack.codec import encode_len_enc_int, read_len_enc_int

data = encode_len_enc_int(1000)      # b"\xfc\xe8\x03"
value, pos = read_len_enc_int(data, 0)
assert (value, pos) == (1000, 3)
```

```python
from dbpack.values import read_length_encoded_string, read_bool

read_length_encoded_string(b"\x03abc")   # (b"abc", False, 4)
read_length_encoded_string(b"\xfb")      # (None, True, 1)
read_bool("True")                        # True
read_bool("yes")                         # None
```

```python
from datetime import datetime
from dbpack.datetimes import parse_date_time, format_date_time, format_binary_date_time

parse_date_time("2022-03-04 05:06:07.5")           # datetime(2022, 3, 4, 5, 6, 7, 500000)
format_date_time(datetime(2022, 3, 4, 5, 6, 7, 500000))  # "2022-03-04 05:06:07.5"
format_binary_date_time(b"\xe6\x07\x03\x04", 10)   # "2022-03-04"
parse_date_time("0000-00-00")                      # None
```

```python
from dbpack.sqltext import mysql_in_params, pgsql_in_params, generate_xid, get_transaction_id

mysql_in_params(3)                        # "(?,?,?)"
pgsql_in_params(3)                        # "($1,$2,$3)"
xid = generate_xid("127.0.0.1:8091", 42)  # "127.0.0.1:8091:42"
get_transaction_id(xid)                   # 42
get_transaction_id("")                    # -1
```

```python
from dbpack.keywords import quote_if_keyword

quote_if_keyword("order")   # "`order`"
quote_if_keyword("user_id") # "user_id"
```

## What it does not do

This is a library of building blocks. It does not open sockets, it does not
run a proxy or listener, and it has no command-line program. It also does
not route or balance connections across backends, escape SQL string
literals, or configure logging.