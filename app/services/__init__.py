"""
Services 패키지
- analysis: 라벨 성과 엔진, 추천, 마일스톤 (순수 계산)
- platform: 플랫폼 API 클라이언트, 계정 레지스트리, 요약 카드, 시뮬레이터
- shared: 공통 인프라 (OAuth state 저장소)
"""
