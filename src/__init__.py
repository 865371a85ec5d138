# src/__init__.py
# Pacote raiz: `src.app` (API FastAPI) e `src.services` (integrações externas).
