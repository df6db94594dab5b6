"""
Test suite for the exception hierarchy.

System role: Verification of error messages and details
"""

from docchat.core.exceptions import (
    DocChatException,
    EmbeddingFailure,
    InvalidArgumentError,
    MappingConflictError,
    NoDocumentsError,
    ProviderError,
    StoreError,
)


class TestDocChatException:
    def test_str_includes_details(self) -> None:
        exc = DocChatException("Something broke", {"source_id": "abc"})

        assert str(exc) == "Something broke | Details: {'source_id': 'abc'}"

    def test_str_without_details(self) -> None:
        assert str(DocChatException("plain")) == "plain"


class TestTypedErrors:
    """Test suite for the fields each error adds to details."""

    def test_invalid_argument_records_field(self) -> None:
        exc = InvalidArgumentError("Chunk size must be positive", field="chunk_size")

        assert exc.details == {"field": "chunk_size"}
        assert isinstance(exc, DocChatException)

    def test_provider_error(self) -> None:
        exc = ProviderError("timeout", provider="ocr", operation="ocr")

        assert exc.provider == "ocr"
        assert exc.details == {"provider": "ocr", "operation": "ocr"}

    def test_store_error(self) -> None:
        assert StoreError("boom", operation="insert_chunks").details["operation"] == "insert_chunks"

    def test_embedding_failure_message(self) -> None:
        exc = EmbeddingFailure(3, source_id="src-1")

        assert exc.message == "Failed to generate embedding for chunk 3"
        assert exc.details == {"ordinal": 3, "source_id": "src-1"}

    def test_no_documents_message(self) -> None:
        assert NoDocumentsError("15550001").message == "No documents mapped to 15550001"

    def test_mapping_conflict_message(self) -> None:
        exc = MappingConflictError("15550001", "src-1")

        assert exc.message == "This phone number is already mapped to this file"
        assert exc.details == {"phone_number": "15550001", "source_id": "src-1"}
