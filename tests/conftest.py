"""
Configuração dos testes: todos os testes usam SQLite em memória.

DATABASE_URL precisa existir antes de app.config ser importado.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
