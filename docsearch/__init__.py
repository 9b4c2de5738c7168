"""docsearch: a typed client over a document search engine's HTTP API."""
