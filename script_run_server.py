"""Script para iniciar o servidor FastAPI na porta 8000."""
import sys
import os

# Adiciona o diretório atual ao path
sys.path.insert(0, os.path.dirname(__file__))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("farmtrak.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
