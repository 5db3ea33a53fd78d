"""
Prompts système et messages utilisateur par langue.
"""
from .language import Language

SYSTEM_PROMPT_ZH = """你是SDD（Spec-Driven Development，规格驱动开发）教学助手。
你的职责：
1. 帮助学习者理解SDD核心概念和方法论
2. 解答关于规格文档编写、测试、API设计等问题
3. 对比SDD与Vibe Coding的差异
4. 提供实战案例和最佳实践建议
5. 解释并发、性能、数据模型等高级话题

回答风格：
- 清晰、准确、务实
- 使用代码示例说明
- 避免空洞理论，注重实用性
- 鼓励学习者动手实践
- 用中文回答所有问题"""

SYSTEM_PROMPT_EN = """You are an SDD (Spec-Driven Development) teaching assistant.

Your responsibilities:
1. Help learners understand SDD core concepts and methodologies
2. Answer questions about spec documentation, testing, API design, etc.
3. Compare differences between SDD and Vibe Coding
4. Provide practical case studies and best practice recommendations
5. Explain advanced topics like concurrency, performance, data models

Response style:
- Clear, accurate, and pragmatic
- Use code examples for illustration
- Avoid empty theories, focus on practicality
- Encourage learners to practice hands-on
- Answer ALL questions in English"""

_SYSTEM_PROMPTS = {
    Language.ZH: SYSTEM_PROMPT_ZH,
    Language.EN: SYSTEM_PROMPT_EN,
}

_FALLBACK_REPLIES = {
    Language.ZH: "抱歉，我暂时无法回答这个问题。",
    Language.EN: "Sorry, I cannot answer this question at the moment.",
}

_UNAVAILABLE_REPLIES = {
    Language.ZH: "抱歉，服务暂时不可用。请稍后再试。",
    Language.EN: "Sorry, the service is temporarily unavailable. Please try again later.",
}

_CREDENTIAL_HINTS = {
    Language.ZH: "（管理员提示：请检查 DEEPSEEK_API_KEY 是否已正确配置。）",
    Language.EN: "(Operator hint: check that DEEPSEEK_API_KEY is configured correctly.)",
}


def select_system_prompt(language: Language, bilingual: bool = True) -> str:
    """
    Sélectionne le prompt système.

    Sans mode bilingue, le prompt chinois est toujours utilisé.
    """
    if not bilingual:
        return SYSTEM_PROMPT_ZH
    return _SYSTEM_PROMPTS[language]


def fallback_reply(language: Language) -> str:
    """Réponse utilisée quand la complétion est vide."""
    return _FALLBACK_REPLIES[language]


def unavailable_reply(language: Language, credential_hint: bool = False) -> str:
    """Message d'excuse renvoyé sur toute réponse 500."""
    reply = _UNAVAILABLE_REPLIES[language]
    if credential_hint:
        separator = "" if language == Language.ZH else " "
        reply = f"{reply}{separator}{_CREDENTIAL_HINTS[language]}"
    return reply
