"""E2E 테스트 모듈입니다."""
