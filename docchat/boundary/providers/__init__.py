"""External provider adapters: Gemini embeddings and chat, Mistral OCR, PDF text."""
