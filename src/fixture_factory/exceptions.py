"""Custom exceptions with helpful error messages."""


class FixtureFactoryError(Exception):
    """Base exception for fixture-factory errors."""

    pass


class ModelNotFoundError(FixtureFactoryError):
    """Model identifier does not resolve to a loadable class."""

    def __init__(self, identifier: str, candidates: list[str] | None = None):
        self.identifier = identifier
        self.candidates = candidates or [identifier]
        tried = ", ".join(self.candidates)
        super().__init__(
            f"Model '{identifier}' could not be resolved (tried: {tried}).\n\n"
            f"Suggestions:\n"
            f"1. Check model name spelling\n"
            f"2. Register the model: registry.register({identifier.rsplit('.', 1)[-1]})\n"
            f"3. Use a dotted path to an importable class: 'myapp.models.Post'"
        )


class NoGeneratorFoundError(FixtureFactoryError):
    """No special-field or data-type generator matches a column."""

    def __init__(self, column: str, data_type: str):
        self.column = column
        self.data_type = data_type
        super().__init__(
            f"Could not find a generator for column '{column}' (type: {data_type}).\n\n"
            f"Suggestions:\n"
            f"1. Provide override:\n"
            f"   factory.make('Model', {{'{column}': 'value'}})\n\n"
            f"2. Register a generator for the type:\n"
            f"   register_type_generator('{data_type}', lambda: fake.word())"
        )


class TableNotFoundError(FixtureFactoryError):
    """Table does not exist in schema."""

    def __init__(self, table: str, schema: str):
        self.table = table
        self.schema = schema
        super().__init__(
            f"Table '{table}' not found in schema '{schema}'.\n\n"
            f"Suggestions:\n"
            f"1. Check the model's __tablename__\n"
            f"2. Run migrations for the test database\n"
            f"3. Ensure table exists: CREATE TABLE {schema}.{table} (...);"
        )


class CircularRelationshipError(FixtureFactoryError):
    """Foreign keys form a cycle while creating related fixtures."""

    def __init__(self, chain: tuple[str, ...]):
        self.chain = chain
        path = " -> ".join(chain)
        super().__init__(
            f"Circular relationship detected: {path}\n\n"
            f"Suggestions:\n"
            f"1. Override the foreign key column to break the cycle:\n"
            f"   factory.create('{chain[0]}', {{'<related>_id': None}})\n"
            f"2. Create the parent first and pass its primary key as an override"
        )
