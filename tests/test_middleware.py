"""
Unit tests for request logging middleware helpers
"""

from bookshelf.middleware import operation_name_from_payload


class TestOperationNameFromPayload:
    def test_explicit_operation_name_wins(self):
        payload = {"operationName": "GetBooks", "query": "query Other { books { id } }"}

        assert operation_name_from_payload(payload) == "GetBooks"

    def test_named_query(self):
        assert operation_name_from_payload({"query": "query AllAuthors { authors { id } }"}) == (
            "AllAuthors"
        )

    def test_named_mutation_is_prefixed(self):
        payload = {"query": 'mutation NewAuthor { addAuthor(name: "A") { id } }'}

        assert operation_name_from_payload(payload) == "mutation:NewAuthor"

    def test_anonymous_operation(self):
        assert operation_name_from_payload({"query": "{ books { id } }"}) == "unnamed_operation"

    def test_introspection(self):
        payload = {"query": "query IntrospectionQuery { __schema { types { name } } }"}

        assert operation_name_from_payload(payload) == "__introspection"

    def test_missing_query(self):
        assert operation_name_from_payload({}) is None
        assert operation_name_from_payload({"query": 42}) is None
