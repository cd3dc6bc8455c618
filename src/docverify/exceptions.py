"""
Custom exceptions for document verification.
"""


class DocumentVerificationError(Exception):
    """Base exception for verification errors"""
    pass


class UnsupportedDocumentType(DocumentVerificationError):
    """Raised when a document type identifier is not registered"""

    def __init__(self, doc_type):
        self.doc_type = doc_type
        super().__init__(f"Unsupported document type: {doc_type}")


class ExtractionError(DocumentVerificationError):
    """Base exception for failures talking to the extraction model"""
    pass


class ExtractionEmptyResponse(ExtractionError):
    """Raised when the model returns no text"""
    pass


class ExtractionParseError(ExtractionError):
    """Raised when the model reply is not a JSON object"""
    pass


class ExtractionServiceError(ExtractionError):
    """Raised for network, quota or request errors from the model service"""
    pass


class VerificationFailedError(DocumentVerificationError):
    """Raised when a verification request cannot produce a result"""
    pass


class PreviewRenderingError(DocumentVerificationError):
    """Raised when no preview image could be rendered from the document"""
    pass
