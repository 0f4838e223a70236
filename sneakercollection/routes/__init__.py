"""FastAPI 엔드포인트 라우팅 모듈들.

모듈을 import 하면 :data:`sneakercollection.api.app` 에 엔드포인트가 등록됩니다.
"""
