# prompt_builder.py
"""
저장된 문서(제목 + 본문)를 요약 요청 프롬프트로 만드는 빌더입니다.
"""

from docgate.schemas.documents import Document


def build_summary_prompt(document: Document) -> str:
    return f"请总结以下内容：\n标题：{document.title}\n内容：{document.content}"
