"""
App layer: HTTP 서버 (FastAPI).

역할:
- GET /  → shared 템플릿을 partial로 쓰는 서버 렌더 페이지
- GET /templates.js → 클라이언트용 사전 컴파일 번들
- /static → 클라이언트 스크립트

주의: 폴더 구분
- src/templates/ → 코드 (컴파일러, registry)
- views/ (루트) → 템플릿 소스
"""
