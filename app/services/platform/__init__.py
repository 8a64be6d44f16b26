"""
Platform 서비스 패키지
- tiktok / youtube / spotify: 외부 API 클라이언트
- accounts: 연결 계정 레지스트리
- summary: 대시보드 요약 카드
- simulator: 광고비 시뮬레이터
"""
