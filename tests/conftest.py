from __future__ import annotations

import pytest

from tests._fixtures.builders import FakeSource


@pytest.fixture
def voting_app_files() -> dict[str, str]:
    """A small but complete full-stack submission."""
    return {
        "README.md": (
            "# Voting app\n\nWe chose PostgreSQL. The architecture has three layers.\n"
            "Trade-off: simplicity over scale.\n"
        ),
        "package.json": '{"dependencies": {"react": "^18", "express": "^4", "prisma": "^5"}}',
        "prompts.md": (
            "# Setup\n\n1. Setup the project and install express\n\n"
            "2. Implement the database schema with postgresql\n\n"
            "3. Now add the api routes for vote casting\n\n"
            "4. Fix the error when a user votes twice\n"
        ),
        "src/api/routes.ts": "router.post('/vote', validate, handler)\n",
        "src/models/schema.prisma": "model Vote { poll Poll @relation(fields: [pollId]) }\n",
        "__tests__/a.test.ts": "test('votes', () => {})\n",
        "tsconfig.json": "{}",
    }


@pytest.fixture
def fake_source(voting_app_files: dict[str, str]) -> FakeSource:
    return FakeSource(voting_app_files)
