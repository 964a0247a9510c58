from __future__ import annotations

from uuid import uuid4

from .errors import DocumentNotFoundError, validate_input_text
from .scoring import ProgressCallback, SimilarityEngine, analyze_document
from .types import AnalysisReport, CheckOptions, StoredDocument


class DocumentRepository:
    """In-memory document store, owned and passed around by the caller."""

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}

    def add(self, name: str, content: str, *, doc_id: str | None = None) -> StoredDocument:
        document = StoredDocument(id=doc_id or str(uuid4()), name=name, content=content)
        self._documents[document.id] = document
        return document

    def get(self, doc_id: str) -> StoredDocument:
        document = self._documents.get(doc_id)
        if document is None:
            raise DocumentNotFoundError(f"Document not found: {doc_id}")
        return document

    def all(self) -> list[StoredDocument]:
        return list(self._documents.values())

    def others(self, doc_id: str) -> list[StoredDocument]:
        return [document for document in self._documents.values() if document.id != doc_id]

    def __len__(self) -> int:
        return len(self._documents)


class ReportRepository:
    def __init__(self) -> None:
        self._reports: dict[str, AnalysisReport] = {}

    def save(self, report: AnalysisReport) -> AnalysisReport:
        self._reports[report.id] = report
        return report

    def get(self, report_id: str) -> AnalysisReport | None:
        return self._reports.get(report_id)

    def all(self) -> list[AnalysisReport]:
        return sorted(self._reports.values(), key=lambda report: report.created_at, reverse=True)

    def for_document(self, doc_id: str) -> list[AnalysisReport]:
        return [report for report in self.all() if report.document_id == doc_id]


def analyze_stored_document(
    engine: SimilarityEngine,
    documents: DocumentRepository,
    reports: ReportRepository,
    doc_id: str,
    options: CheckOptions | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> AnalysisReport:
    subject = documents.get(doc_id)
    validate_input_text(subject.content, label=f"document {doc_id}")
    report = analyze_document(engine, subject, documents.others(doc_id), options, progress=progress)
    return reports.save(report)
