# app/api/__init__.py
"""
🌐 API (FastAPI)

- app.py       - фабрики приложений (дашборд, вебхук)
- dashboard.py - страница, SSE, JSON ручки
- webhooks/    - вебхук Telegram
"""
