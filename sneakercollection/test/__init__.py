"""Test 헬퍼를 제공하는 모듈.

- 서비스 단위 테스트에 사용할 FakeRepository 를 제공합니다.

"""
