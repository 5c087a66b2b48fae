# payment-service

A small HTTP service for the payment side of a booking system. It stores
payments in a MySQL table called `payments`. Clients can create, read and
update payments. Processing a pending payment marks it `SUCCESS`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The database connection (`payment_service.database.connect`) needs a `.env`
file in the working directory. Without one it raises `DatabaseError`. The
file is loaded into the environment, and the connection is then built from
these variables:

| Variable      | Meaning                                  |
|---------------|------------------------------------------|
| `DB_HOST`     | MySQL host (default `localhost`)         |
| `DB_PORT`     | MySQL port (default `3306`)              |
| `DB_USER`     | MySQL user                               |
| `DB_PASSWORD` | MySQL password                           |
| `DB_NAME`     | MySQL database holding `payments`        |

The server reads two more variables from the process environment:

| Variable      | Meaning                                  |
|---------------|------------------------------------------|
| `HOST_SERVER` | host part of the accepted address        |
| `PORT_SERVER` | port the server listens on               |

A minimal `.env`:

```
DB_HOST=localhost
DB_PORT=3306
DB_USER=user
DB_PASSWORD=password
DB_NAME=payments
```

The connection is opened once per process and then shared.

## Preparing the database

```
payment-service-migrate path/to/create_payments.sql
```

This command runs each SQL file you give it, in order, and stops at the
first failure. It exits with status `1` if it cannot connect or a file
fails. If you give no files, it looks for
`cmd/db/migrations/sql/000_create_payment_table.sql` relative to the
working directory.

The same steps are available from code as
`payment_service.migrations.migrate(connection, files)` and
`execute_sql_file(connection, path)`.

## Running the server

```
payment-service --host localhost --port 8080
```

`--host` and `--port` default to `HOST_SERVER` and `PORT_SERVER`.

The server only answers requests whose `Host` header is exactly
`<host>:<port>`. Any other request gets `400` with
`{"error": "Invalid host header"}`.

Every other response carries a fixed set of security headers, such as
`X-Frame-Options: DENY` and `X-Content-Type-Options: nosniff`.

CORS works as follows:

- Cross-origin requests are accepted only from `http://localhost:5173`, with credentials allowed.
- A preflight `OPTIONS` request from that origin gets `204`.
- Any other foreign origin gets `403`.

To build the application without starting it, call
`payment_service.server.create_app(host, port, repository, uuid_generator)`.
The result is a Flask app. Any object with `create`, `get_by_id` and
`update` methods can serve as the repository. When none is given,
`MySQLPaymentRepository` is used. When no generator is given,
`RandomUUIDGenerator` is used.

## Endpoints

| Method  | Path                        | Purpose                                       |
|---------|-----------------------------|-----------------------------------------------|
| `GET`   | `/ping`                     | health check, returns `{"message": "pong!"}`  |
| `POST`  | `/v1/payment/`              | create a pending payment                      |
| `GET`   | `/v1/payment/<id>`          | fetch one payment                             |
| `PATCH` | `/v1/payment/<id>`          | set a payment's status and processing time    |
| `POST`  | `/v1/payment/process/<id>`  | process a pending payment                     |

Creating a payment requires every field, and none may be zero or empty:

```json
{
  "amount": 120.5,
  "currency": "MXN",
  "booking_id": 7,
  "user_id": 3,
  "payment_method": "CARD"
}
```

The new payment starts as `PENDING` and gets a random UUID as its
transaction id. The reply is `201`.

Updating a payment takes two fields:

- `status`: one of `SUCCESS`, `FAILED` or `CANCELED`;
- `process_at`: an RFC 3339 timestamp.

```json
{
  "status": "SUCCESS",
  "process_at": "2024-05-01T12:00:00Z"
}
```

Replies share one envelope:

```json
{"status": true, "message": "Payment retrieved successfully", "data": {"ID": 1, "Status": "PENDING"}}
```

In `data`, a payment has these keys:

- `ID`
- `BookingID`
- `UserID`
- `Amount`
- `Currency`
- `Status`
- `PaymentMethod`
- `ProcessedAt`
- `TransactionID`

On failure, `status` is `false` and `error` holds the reason. A badly formed
id or body gives `400`. A storage failure, including an unknown id, gives
`500`.

The process endpoint behaves differently:

- It replies `200` with an empty body whether or not processing succeeded.
- A failure is only logged.
- A badly formed id gives `400`.

## Payment life cycle

`payment_service.payment.Payment` moves between the `PaymentStatus` values
`PENDING`, `SUCCESS`, `FAILED` and `CANCELED`:

- `process()` works only on a `PENDING` payment. It marks the payment
  `SUCCESS`, sets `processed_at` and returns a `PaymentProcessed` event.
- `refund()` and `cancel()` work only on a `SUCCESS` payment and mark it
  `CANCELED`.
- `retry()` works only on a `FAILED` payment and puts it back to `PENDING`.

Any other transition raises `PaymentStateError`.

`payment_service.money.Money` is an amount with a currency. It rejects a
negative amount or an empty currency, and prints as, for example,
`120.50 MXN`.

## What is not included

- The package does not ship the SQL that creates the `payments` table.
  Supply that file yourself and pass its path to `payment-service-migrate`.
- There is no endpoint for refunding, cancelling or retrying a payment.
  Those transitions exist only on the `Payment` object.