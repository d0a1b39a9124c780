"""
plugins/iam - IAM 구성 점검 도구

Tools:
    - IAM Conformance Check: 정책 권한, 역할/그룹 정책 연결, 사용자 그룹 멤버십
"""
