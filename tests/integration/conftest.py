"""
Integration fixtures: a throwaway schema on a real PostgreSQL server.

Set TEST_DATABASE_URL to run these tests; they are skipped otherwise.
Each test starts from the same seed data.
"""

import os
import uuid

import psycopg2
import pytest
from psycopg2.extensions import make_dsn

from db.connection import Database
from main import OlympicsBackend

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

SCHEMA_SQL = """
CREATE TABLE country (
    country_code    CHAR(3) PRIMARY KEY,
    country_name    VARCHAR(40) NOT NULL
);
CREATE TABLE place (
    place_id        INTEGER PRIMARY KEY,
    place_name      VARCHAR(80) NOT NULL UNIQUE
);
CREATE TABLE accommodation (place_id INTEGER PRIMARY KEY REFERENCES place);
CREATE TABLE sportvenue (place_id INTEGER PRIMARY KEY REFERENCES place);
CREATE TABLE member (
    member_id       VARCHAR(10) PRIMARY KEY,
    title           VARCHAR(4),
    family_name     VARCHAR(30) NOT NULL,
    given_names     VARCHAR(30) NOT NULL,
    country_code    CHAR(3) NOT NULL REFERENCES country,
    accommodation   INTEGER REFERENCES accommodation,
    pass_word       VARCHAR(20)
);
CREATE TABLE athlete (member_id VARCHAR(10) PRIMARY KEY REFERENCES member);
CREATE TABLE official (member_id VARCHAR(10) PRIMARY KEY REFERENCES member);
CREATE TABLE staff (member_id VARCHAR(10) PRIMARY KEY REFERENCES member);
CREATE TABLE sport (
    sport_id        INTEGER PRIMARY KEY,
    sport_name      VARCHAR(40) NOT NULL,
    discipline      VARCHAR(40) NOT NULL
);
CREATE TABLE event (
    event_id        INTEGER PRIMARY KEY,
    sport_id        INTEGER NOT NULL REFERENCES sport,
    sport_venue     INTEGER NOT NULL REFERENCES sportvenue,
    event_name      VARCHAR(50) NOT NULL,
    event_gender    CHAR(1) NOT NULL,
    event_start     TIMESTAMP NOT NULL
);
CREATE TABLE participates (
    event_id        INTEGER REFERENCES event,
    athlete_id      VARCHAR(10) REFERENCES athlete,
    medal           CHAR(1),
    PRIMARY KEY (event_id, athlete_id)
);
CREATE TABLE team (
    event_id        INTEGER REFERENCES event,
    team_name       VARCHAR(50),
    country_code    CHAR(3) NOT NULL REFERENCES country,
    medal           CHAR(1),
    PRIMARY KEY (event_id, team_name)
);
CREATE TABLE teammember (
    event_id        INTEGER,
    team_name       VARCHAR(50),
    athlete_id      VARCHAR(10) REFERENCES athlete,
    PRIMARY KEY (event_id, team_name, athlete_id),
    FOREIGN KEY (event_id, team_name) REFERENCES team
);
CREATE TABLE vehicle (
    vehicle_code    VARCHAR(8) PRIMARY KEY,
    capacity        INTEGER NOT NULL CHECK (capacity > 0)
);
CREATE TABLE journey (
    journey_id      INTEGER PRIMARY KEY,
    from_place      INTEGER NOT NULL REFERENCES place,
    to_place        INTEGER NOT NULL REFERENCES place,
    vehicle_code    VARCHAR(8) NOT NULL REFERENCES vehicle,
    depart_time     TIMESTAMP NOT NULL,
    arrive_time     TIMESTAMP NOT NULL,
    nbooked         INTEGER NOT NULL DEFAULT 0,
    UNIQUE (vehicle_code, depart_time)
);
CREATE TABLE booking (
    booked_for      VARCHAR(10) REFERENCES member,
    booked_by       VARCHAR(10) NOT NULL REFERENCES staff,
    when_booked     TIMESTAMP NOT NULL,
    journey_id      INTEGER REFERENCES journey,
    PRIMARY KEY (booked_for, journey_id)
);
"""

SEED_SQL = """
INSERT INTO country VALUES ('AUS', 'Australia'), ('USA', 'United States'), ('GBR', 'Great Britain');
INSERT INTO place VALUES (1, 'Olympic Village'), (2, 'Stadium'), (3, 'Aquatic Centre'), (4, 'Airport');
INSERT INTO accommodation VALUES (1);
INSERT INTO sportvenue VALUES (2), (3);

INSERT INTO member VALUES
    ('A001', 'Mr',  'Smith', 'John',  'AUS', 1, 'pw1'),
    ('A002', 'Ms',  'Brown', 'Alice', 'USA', 1, 'pw2'),
    ('A003', 'Ms',  'Smith', 'Jane',  'AUS', 1, 'pw3'),
    ('O001', 'Dr',  'Green', 'Olga',  'GBR', 1, 'pw4'),
    ('S001', 'Mr',  'White', 'Sam',   'AUS', 1, 'staffpw'),
    ('S002', NULL,  'Black', 'Kim',   'USA', NULL, 'staffpw2'),
    ('M010', 'Mr',  'Lee',   'Chris', 'AUS', 1, 'x'),
    ('M011', 'Mx',  'Lee',   'Chris', 'USA', 1, 'y');
INSERT INTO athlete VALUES ('A001'), ('A002'), ('A003');
INSERT INTO official VALUES ('O001');
INSERT INTO staff VALUES ('S001'), ('S002'), ('M010'), ('M011');

INSERT INTO sport VALUES (1, 'Swimming', 'Freestyle'), (2, 'Athletics', 'Track');
INSERT INTO event VALUES
    (10, 1, 3, '100m Freestyle', 'M', '2026-07-25 10:00'),
    (11, 1, 3, '4x100m Relay',   'M', '2026-07-26 18:00'),
    (20, 2, 2, '100m Sprint',    'W', '2026-07-27 20:00');
INSERT INTO participates VALUES
    (10, 'A001', 'G'), (10, 'A002', 'S'), (10, 'A003', NULL), (20, 'A002', 'G');
INSERT INTO team VALUES (11, 'Dolphins', 'AUS', 'G'), (11, 'Eagles', 'USA', 'B');
INSERT INTO teammember VALUES (11, 'Dolphins', 'A001'), (11, 'Eagles', 'A002');

INSERT INTO vehicle VALUES ('BUS01', 2), ('VAN01', 5), ('CAR01', 1);
INSERT INTO journey VALUES
    (100, 1, 2, 'BUS01', '2026-07-24 08:00', '2026-07-24 08:30', 2),
    (101, 1, 2, 'VAN01', '2026-07-24 09:00', '2026-07-24 09:40', 4),
    (102, 1, 3, 'CAR01', '2026-07-24 10:00', '2026-07-24 10:20', 0),
    (103, 2, 1, 'VAN01', '2026-07-25 17:00', '2026-07-25 17:40', 0);
INSERT INTO booking VALUES
    ('A002', 'S001', '2026-07-01 09:00', 100),
    ('A003', 'S001', '2026-07-01 09:05', 100),
    ('A001', 'S001', '2026-07-01 10:00', 101),
    ('A002', 'S001', '2026-07-01 10:01', 101),
    ('A003', 'S002', '2026-07-01 10:02', 101),
    ('O001', 'S002', '2026-07-01 10:03', 101);
"""

TABLES = (
    "booking, journey, vehicle, teammember, team, participates, event, sport, "
    "staff, official, athlete, member, sportvenue, accommodation, place, country"
)


@pytest.fixture(scope="session")
def schema_dsn():
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")

    schema = f"olympics_test_{uuid.uuid4().hex[:8]}"
    admin = psycopg2.connect(TEST_DATABASE_URL)
    admin.autocommit = True
    with admin.cursor() as cur:
        cur.execute(f"CREATE SCHEMA {schema}")
        cur.execute(f"SET search_path TO {schema}")
        cur.execute(SCHEMA_SQL)
    try:
        yield make_dsn(TEST_DATABASE_URL, options=f"-c search_path={schema}")
    finally:
        with admin.cursor() as cur:
            cur.execute(f"DROP SCHEMA {schema} CASCADE")
        admin.close()


@pytest.fixture
def raw_conn(schema_dsn):
    """Direct connection for seeding and for asserting on table state."""
    conn = psycopg2.connect(schema_dsn)
    conn.autocommit = True
    with conn.cursor() as cur:
        cur.execute(f"TRUNCATE {TABLES} CASCADE")
        cur.execute(SEED_SQL)
    yield conn
    conn.close()


@pytest.fixture
def backend(schema_dsn, raw_conn):
    db = Database(schema_dsn, min_conn=1, max_conn=8)
    db.open()
    yield OlympicsBackend(db)
    db.close()


@pytest.fixture
def table_state(raw_conn):
    """Snapshot of (booking rows, nbooked per journey)."""

    def _snapshot():
        with raw_conn.cursor() as cur:
            cur.execute("SELECT booked_for, booked_by, journey_id FROM booking ORDER BY 1, 3")
            bookings = cur.fetchall()
            cur.execute("SELECT journey_id, nbooked FROM journey ORDER BY 1")
            counts = dict(cur.fetchall())
        return bookings, counts

    return _snapshot
