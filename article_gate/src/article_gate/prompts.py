"""
Prompt templates and JSON output schemas for outline/article generation.

The schemas are passed as OpenAI structured-output json_schema definitions;
every object forbids additional properties.
"""

from .models import ArticleRequest


# =====================================================
# OUTPUT SCHEMAS
# =====================================================
OUTLINE_SCHEMA = {
    "name": "outline_schema",
    "schema": {
        "type": "object",
        "properties": {"outline": {"type": "string"}},
        "required": ["outline"],
        "additionalProperties": False,
    },
}

ARTICLE_SCHEMA = {
    "name": "article_schema",
    "schema": {
        "type": "object",
        "properties": {
            "article": {
                "type": "object",
                "properties": {
                    "articleTitle": {"type": "string"},
                    "articleHtmlContent": {"type": "string"},
                    "secondaryKeywords": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["articleTitle", "articleHtmlContent", "secondaryKeywords"],
                "additionalProperties": False,
            },
            "metadata": {
                "type": "object",
                "properties": {
                    "metaTitle": {"type": "string"},
                    "metaDescription": {"type": "string"},
                    "socialTitle": {"type": "string"},
                    "socialDescription": {"type": "string"},
                },
                "required": ["metaTitle", "metaDescription", "socialTitle", "socialDescription"],
                "additionalProperties": False,
            },
            "gate": {
                "type": "object",
                "properties": {
                    "blocked": {"type": "boolean"},
                    "reasons": {"type": "array", "items": {"type": "string"}},
                    "claimsNeedingCitations": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["blocked", "reasons", "claimsNeedingCitations"],
                "additionalProperties": False,
            },
        },
        "required": ["article", "metadata", "gate"],
        "additionalProperties": False,
    },
}


# =====================================================
# SYSTEM PROMPT
# =====================================================
SYSTEM_PROMPT = (
    "أنت مساعد تحرير لمحتوى صحي YMYL. التزم بدقة الحقائق، الأسلوب الواضح، والحياد. "
    "أخرج دائمًا JSON صالحًا فقط."
)


# =====================================================
# OUTLINE PROMPT
# =====================================================
OUTLINE_USER_TEMPLATE = (
    'أنشئ هيكل SEO مفصل لمقال (~{target_words} كلمة) حول: "{topic}" باللغة {language}. '
    "يجب أن يحتوي على H2 رئيسية و H3 فرعية (بدون أرقام تلقائية). "
    "أعده في حقل outline نصًا خامًا."
)


# =====================================================
# ARTICLE PROMPT
# =====================================================
ARTICLE_USER_TEMPLATE = """اكتب مقالاً (~{target_words} كلمة) باللغة {language} وفق الهيكل التالي:
--- OUTLINE START ---
{outline}
--- OUTLINE END ---

الشروط:
- اتبع أسلوب مقدمة: {intro_style}، وخاتمة: {conclusion_style}.
- أدرج إحالات مرقّمة داخل النص مثل [1], [2] تشير إلى المصادر المعطاة (لا تخترع مصادر).
- أضف فقرة "إخلاء المسؤولية الطبية" في النهاية.
{faq_rule}- ولّد secondaryKeywords ذات صلة (≥{min_keywords}).

بيانات مساعدة:
- الكلمة الأساسية: {primary_keyword}
- مصادر موثوقة:
{sources}
- روابط داخلية (اختياري):
{internal_links}

أعد JSON بالمفاتيح: article{{articleTitle, articleHtmlContent, secondaryKeywords[]}}, metadata{{metaTitle, metaDescription, socialTitle, socialDescription}}, gate{{blocked, reasons[], claimsNeedingCitations[]}}. لا تعُد أي حقول أخرى."""

FAQ_RULE = '- اجعل قسم "أسئلة شائعة" آخر عنصر في المقال.\n'


def build_outline_prompt(topic: str, language: str, target_words: int = 1500) -> str:
    return OUTLINE_USER_TEMPLATE.format(
        topic=topic,
        language=language,
        target_words=target_words,
    )


def build_article_prompt(
    request: ArticleRequest,
    target_words: int = 1500,
    min_keywords: int = 3,
) -> str:
    """
    Render the article prompt for a normalized request.

    Sources are numbered [1]..[n] so that in-text citation markers map back
    to them.
    """
    sources = "\n".join(f"[{i}] {s.strip()}" for i, s in enumerate(request.sources or [], start=1))
    internal_links = "\n".join(f"- {u}" for u in request.internal_links)

    return ARTICLE_USER_TEMPLATE.format(
        target_words=target_words,
        language=request.language,
        outline=request.outline,
        intro_style=request.intro_style,
        conclusion_style=request.conclusion_style,
        faq_rule=FAQ_RULE if request.include_faq else "",
        min_keywords=min_keywords,
        primary_keyword=request.primary_keyword,
        sources=sources,
        internal_links=internal_links,
    )
