"""
Ingestion — document loading, chunking, and embedding into the vector store.

Raw text (already extracted from PDF or plain files) is cut into
overlapping segments, embedded one by one, and appended to a
:class:`~doc_assistant.retrieval.base.VectorStoreBase`.
"""
