import json

import pytest
from faker import Faker

fake = Faker()
Faker.seed(20240101)


def lorem(length: int) -> str:
    """Lorem text of exactly `length` characters, on one line."""
    chunks = []
    total = 0
    while total < length:
        chunk = fake.text(max_nb_chars=200).replace("\n", " ")
        chunks.append(chunk)
        total += len(chunk) + 1
    return " ".join(chunks)[:length]


def decode(envelope: str) -> dict:
    """Parse an envelope, decoding each platform entry into its payload object."""
    data = json.loads(envelope)
    return {key: value if key == "default" else json.loads(value) for key, value in data.items()}


@pytest.fixture
def words():
    return fake.words(3)
