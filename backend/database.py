import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()

logger = logging.getLogger(__name__)

ACTIVE_SLOT_INDEX = 'uq_appointments_active_slot'


def _engine_options(url: str) -> dict:
    parsed = make_url(url)
    if parsed.get_backend_name() != 'sqlite':
        return {}

    options = {'connect_args': {'check_same_thread': False}}
    if parsed.database in (None, '', ':memory:'):
        # every session must see the same in-memory database
        options['poolclass'] = StaticPool
    return options


class Database:
    """Storage client owning the engine and session factory.

    Built once by the process entry point and handed to whatever needs it;
    nothing in the package opens a connection at import time.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine = create_engine(url, **_engine_options(url))
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        self._schema_lock = Lock()
        self._appointment_schema_checked = False

    def create_schema(self) -> None:
        # models register their tables on Base.metadata
        from backend.models import appointment, doctor, specialty  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        self.ensure_appointment_schema()

    def ensure_appointment_schema(self) -> None:
        if self._appointment_schema_checked:
            return

        with self._schema_lock:
            if self._appointment_schema_checked:
                return

            inspector = inspect(self.engine)

            if 'appointments' not in inspector.get_table_names():
                self._appointment_schema_checked = True
                return

            existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
            migration_steps = [
                ('duration', 'ALTER TABLE appointments ADD COLUMN duration INTEGER DEFAULT 30'),
                ('reason', 'ALTER TABLE appointments ADD COLUMN reason VARCHAR'),
                ('notes', 'ALTER TABLE appointments ADD COLUMN notes VARCHAR'),
                ('updated_at', 'ALTER TABLE appointments ADD COLUMN updated_at TIMESTAMP'),
            ]

            with self.engine.begin() as connection:
                for column_name, statement in migration_steps:
                    if column_name not in existing_columns:
                        logger.info('Adding missing column appointments.%s', column_name)
                        connection.execute(text(statement))
                connection.execute(
                    text(
                        'CREATE INDEX IF NOT EXISTS idx_appointments_doctor_date '
                        'ON appointments(doctor_id, appointment_date)'
                    )
                )
                self._cancel_duplicate_active_bookings(connection)
                connection.execute(
                    text(
                        f'CREATE UNIQUE INDEX IF NOT EXISTS {ACTIVE_SLOT_INDEX} '
                        'ON appointments(doctor_id, appointment_date, appointment_time) '
                        "WHERE status IN ('confirmed', 'pending')"
                    )
                )

            self._appointment_schema_checked = True

    def _cancel_duplicate_active_bookings(self, connection) -> None:
        """Keep the oldest active appointment per slot and cancel the rest.

        Tables written before the active-slot index existed may hold
        double-bookings, which would make the unique index creation fail.
        """
        duplicate_slots = connection.execute(
            text(
                'SELECT doctor_id, appointment_date, appointment_time FROM appointments '
                "WHERE status IN ('confirmed', 'pending') "
                'GROUP BY doctor_id, appointment_date, appointment_time '
                'HAVING COUNT(*) > 1'
            )
        ).all()

        for doctor_id, appointment_date, appointment_time in duplicate_slots:
            appointment_ids = connection.execute(
                text(
                    'SELECT id FROM appointments '
                    'WHERE doctor_id = :doctor_id AND appointment_date = :appointment_date '
                    'AND appointment_time = :appointment_time '
                    "AND status IN ('confirmed', 'pending') ORDER BY id"
                ),
                {
                    'doctor_id': doctor_id,
                    'appointment_date': appointment_date,
                    'appointment_time': appointment_time,
                },
            ).scalars().all()

            cancelled_ids = appointment_ids[1:]
            logger.warning(
                'Doctor %s is double-booked on %s at %s; keeping appointment %s and cancelling %s',
                doctor_id,
                appointment_date,
                appointment_time,
                appointment_ids[0],
                cancelled_ids,
            )
            for appointment_id in cancelled_ids:
                connection.execute(
                    text("UPDATE appointments SET status = 'cancelled' WHERE id = :appointment_id"),
                    {'appointment_id': appointment_id},
                )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
