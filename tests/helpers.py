"""Settings and token helpers shared by the test modules."""

from config.settings import Settings

TEST_SECRET = "test-signing-key-for-the-task-manager-suite"


def make_settings(**overrides) -> Settings:
    values = dict(
        jwt_secret=TEST_SECRET,
        jwt_issuer="taskmanager-tests",
        jwt_audience="taskmanager-clients",
        jwt_expiry_minutes=60,
        bcrypt_rounds=4,
        database_url="sqlite+aiosqlite://",
        create_tables=False,
        api_prefix="/api",
        cors_origins=["http://localhost:3000"],
    )
    values.update(overrides)
    return Settings(**values)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
