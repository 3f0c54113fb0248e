"""Faker-based default generators."""

from collections.abc import Callable
from functools import partial
from typing import Any

from faker import Faker

# Column names that need a semantically shaped value regardless of storage type
SPECIAL_FIELDS: dict[str, Callable[[Faker], Any]] = {
    "name": lambda fake: fake.name(),
    "email": lambda fake: fake.email(),
    "phone": lambda fake: fake.phone_number(),
    "age": lambda fake: fake.random_int(min=18, max=90),
    "address": lambda fake: fake.address(),
    "city": lambda fake: fake.city(),
    "state": lambda fake: fake.state(),
    "zip": lambda fake: fake.zipcode(),
    "street": lambda fake: fake.street_address(),
    "website": lambda fake: fake.url(),
    "title": lambda fake: fake.sentence(nb_words=4).rstrip("."),
}

# Normalized data type -> value shape
TYPE_FALLBACKS: dict[str, Callable[[Faker], Any]] = {
    "string": lambda fake: fake.text(max_nb_chars=50),
    "text": lambda fake: fake.text(max_nb_chars=200),
    "integer": lambda fake: fake.random_int(min=1, max=1000),
    "bigint": lambda fake: fake.random_int(min=1, max=100000),
    "smallint": lambda fake: fake.random_int(min=1, max=100),
    "decimal": lambda fake: fake.pydecimal(left_digits=5, right_digits=2, positive=True),
    "float": lambda fake: fake.pyfloat(min_value=0, max_value=10000),
    "boolean": lambda fake: fake.boolean(),
    "date": lambda fake: fake.date_this_year(),
    "time": lambda fake: fake.time_object(),
    "datetime": lambda fake: fake.date_time_this_year(),
    "guid": lambda fake: fake.uuid4(),
    "json": lambda fake: {"key": fake.word(), "value": fake.random_int()},
    "binary": lambda fake: fake.binary(length=16),
}


class FakerGenerator:
    """Bind the default generator tables to a Faker instance."""

    def __init__(self, locale: str | None = None, seed: int | None = None):
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def field_generators(self) -> dict[str, Callable[[], Any]]:
        return {name: partial(method, self.fake) for name, method in SPECIAL_FIELDS.items()}

    def type_generators(self) -> dict[str, Callable[[], Any]]:
        return {name: partial(method, self.fake) for name, method in TYPE_FALLBACKS.items()}
