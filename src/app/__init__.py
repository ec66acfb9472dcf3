"""
App layer: API 서버 (FastAPI).

역할:
- 프로젝트 생성/열기, 템플릿 목록, 에셋 노트 요청 처리
- ⚠️ 파일시스템 로직 없음 (projects/, templates/에 위임)

주의: 폴더 구분
- src/templates/ → 코드 (catalog.py, instantiator.py)
- templates/ (루트) → 데이터 저장소 (registry.yaml, <id>/<version>/)
"""
