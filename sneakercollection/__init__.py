"""SneakerCollection: 사용자별 스니커즈 컬렉션을 관리하는 REST API."""

__version__ = "0.1.0"
