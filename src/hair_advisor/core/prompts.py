#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AI prompts for hair analysis, in English, French and Arabic.

This module centralizes all prompt templates sent to the text-generation
service. The hair analysis template fixes the section headings that the
report parser looks for, so the two must change together.
"""

import logging
import re
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

HAIR_ANALYSIS = "hair_analysis"
ROUTINE_GENERATION = "routine_generation"
AI_ADVISOR = "ai_advisor"
GENERAL_ANALYSIS = "general_analysis"

PROMPT_TYPES = (HAIR_ANALYSIS, ROUTINE_GENERATION, AI_ADVISOR, GENERAL_ANALYSIS)
DEFAULT_LANGUAGE = "en"

MAX_QUESTION_LENGTH = 1000
MAX_ANALYSIS_CONTEXT_LENGTH = 6000

# Image views captured by the app, in prompt order
IMAGE_VIEWS = ("up", "back", "left", "right")


class HairPrompts:
    """Collection of prompt templates keyed by language and prompt type."""

    # ---------- ENGLISH ----------
    EN = {
        HAIR_ANALYSIS: """Please provide a comprehensive hair analysis based on the uploaded images. Structure your response in the following format:

**Comprehensive Hair Analysis Report**

**Global Hair State Score:**
[Provide a percentage score (0-100%) based on overall hair health, considering texture, color, scalp condition, and any visible issues]

**Detailed Scalp Analysis:**
[Analyze the scalp condition, looking for dandruff, redness, irritation, or other issues]

**Detailed Color Analysis:**
[Analyze the hair color, including:
- Detected Color: [describe the main color]
- Color Reference: [if applicable, provide a color name or reference]
- Hex Code: [if possible, provide a hex color code]
- Summary: [brief summary of color analysis]]

**Key Observations and Potential Issues:**
[List any notable observations about hair health, texture, or potential issues]

**Recommendations:**
[Provide 5 specific recommendations with IconHint for each:
- Recommendation: [specific advice] IconHint: [relevant icon name]
- Recommendation: [specific advice] IconHint: [relevant icon name]
- Recommendation: [specific advice] IconHint: [relevant icon name]
- Recommendation: [specific advice] IconHint: [relevant icon name]
- Recommendation: [specific advice] IconHint: [relevant icon name]]

Please ensure the response is detailed, professional, and actionable.""",

        ROUTINE_GENERATION: """Based on the provided hair analysis, create a personalized hair care routine. Please respond in the following JSON format:

{
  "title": "Personalized Daily and Weekly Hair Care Routine",
  "steps": [
    {
      "title": "[Step Title]",
      "description": "[Detailed description of the step with specific instructions, timing, and product recommendations]"
    }
  ]
}

Please provide at least 3 steps that address the specific issues identified in the analysis. Make the routine practical, achievable, and personalized to the user's hair condition.""",

        AI_ADVISOR: """You are an expert hair and scalp advisor. You can ONLY provide advice about hair, scalp, and hair care topics.
If the user asks about anything else, politely redirect them to hair-related questions.

IMPORTANT: Always respond in the same language as the user's question.

Please provide detailed and helpful advice about their hair concerns. Focus on:
- Professional hair care recommendations
- Product suggestions when appropriate
- Styling tips and techniques
- Hair health and maintenance advice
- Scalp care recommendations

Be specific, detailed, and provide actionable advice. Always stay within the realm of hair care.""",

        GENERAL_ANALYSIS: "You are an expert hair and scalp advisor. Please analyze the provided hair image and answer the user's question. IMPORTANT: Respond in the same language as the user's question.",
    }

    # ---------- FRENCH ----------
    FR = {
        HAIR_ANALYSIS: """Veuillez fournir une analyse complète des cheveux basée sur les images téléchargées. Structurez votre réponse dans le format suivant :

**Rapport d'analyse complète des cheveux**

**Score global de l'état des cheveux :**
[Fournissez un score en pourcentage (0-100%) basé sur la santé globale des cheveux, en tenant compte de la texture, de la couleur, de l'état du cuir chevelu et de tout problème visible]

**Analyse détaillée du cuir chevelu :**
[Analysez l'état du cuir chevelu, en recherchant les pellicules, rougeurs, irritations ou autres problèmes]

**Analyse détaillée de la couleur :**
[Analysez la couleur des cheveux, y compris :
- Couleur détectée : [décrivez la couleur principale]
- Référence de couleur : [si applicable, fournissez un nom de couleur ou une référence]
- Code hexadécimal : [si possible, fournissez un code couleur hexadécimal]
- Résumé : [résumé bref de l'analyse de couleur]]

**Observations clés et problèmes potentiels :**
[Listez toutes les observations notables sur la santé des cheveux, la texture ou les problèmes potentiels]

**Recommandations :**
[Fournissez 5 recommandations spécifiques avec IconHint pour chacune :
- Recommandation : [conseil spécifique] IconHint : [nom d'icône pertinent]
- Recommandation : [conseil spécifique] IconHint : [nom d'icône pertinent]
- Recommandation : [conseil spécifique] IconHint : [nom d'icône pertinent]
- Recommandation : [conseil spécifique] IconHint : [nom d'icône pertinent]
- Recommandation : [conseil spécifique] IconHint : [nom d'icône pertinent]]

Veuillez vous assurer que la réponse est détaillée, professionnelle et actionnable.""",

        ROUTINE_GENERATION: """Basé sur l'analyse des cheveux fournie, créez une routine de soins capillaires personnalisée. Veuillez répondre au format JSON suivant :

{
  "title": "Routine de soins capillaires quotidienne et hebdomadaire personnalisée",
  "steps": [
    {
      "title": "[Titre de l'étape]",
      "description": "[Description détaillée de l'étape avec instructions spécifiques, timing et recommandations de produits]"
    }
  ]
}

Veuillez fournir au moins 3 étapes qui abordent les problèmes spécifiques identifiés dans l'analyse. Rendez la routine pratique, réalisable et personnalisée à l'état des cheveux de l'utilisateur.""",

        AI_ADVISOR: """Vous êtes un conseiller expert en cheveux et cuir chevelu. Vous ne pouvez fournir que des conseils sur les cheveux, le cuir chevelu et les soins capillaires.
Si l'utilisateur pose une question sur autre chose, redirigez-le poliment vers les questions liées aux cheveux.

IMPORTANT : Répondez toujours dans la même langue que la question de l'utilisateur.

Veuillez fournir des conseils détaillés et utiles sur leurs préoccupations capillaires. Concentrez-vous sur :
- Recommandations professionnelles de soins capillaires
- Suggestions de produits quand c'est approprié
- Conseils et techniques de coiffage
- Conseils de santé et d'entretien des cheveux
- Recommandations de soins du cuir chevelu

Soyez spécifique, détaillé et fournissez des conseils actionnables. Restez toujours dans le domaine des soins capillaires.""",

        GENERAL_ANALYSIS: "Vous êtes un expert en cheveux et cuir chevelu. Veuillez analyser l'image de cheveux fournie et répondre à la question de l'utilisateur. IMPORTANT : Répondez dans la même langue que la question de l'utilisateur.",
    }

    # ---------- ARABIC ----------
    AR = {
        HAIR_ANALYSIS: """يرجى تقديم تحليل شامل للشعر بناءً على الصور المرفوعة. قم ببناء إجابتك بالتنسيق التالي:

**تقرير تحليل الشعر الشامل**

**الدرجة العالمية لحالة الشعر:**
[قدم درجة مئوية (0-100%) بناءً على الصحة العامة للشعر، مع مراعاة الملمس واللون وحالة فروة الرأس وأي مشاكل مرئية]

**تحليل مفصل لفروة الرأس:**
[حلل حالة فروة الرأس، بحثاً عن قشرة الرأس أو الاحمرار أو التهيج أو أي مشاكل أخرى]

**تحليل مفصل للون:**
[حلل لون الشعر، بما في ذلك:
- اللون المكتشف: [صف اللون الرئيسي]
- مرجع اللون: [إذا كان مناسباً، قدم اسم لون أو مرجع]
- رمز اللون السداسي: [إذا أمكن، قدم رمز لون سداسي]
- الملخص: [ملخص مختصر لتحليل اللون]]

**الملاحظات الرئيسية والمشاكل المحتملة:**
[اذكر أي ملاحظات مهمة حول صحة الشعر أو الملمس أو المشاكل المحتملة]

**التوصيات:**
[قدم 5 توصيات محددة مع IconHint لكل منها:
- توصية: [نصيحة محددة] IconHint: [اسم أيقونة ذي صلة]
- توصية: [نصيحة محددة] IconHint: [اسم أيقونة ذي صلة]
- توصية: [نصيحة محددة] IconHint: [اسم أيقونة ذي صلة]
- توصية: [نصيحة محددة] IconHint: [اسم أيقونة ذي صلة]
- توصية: [نصيحة محددة] IconHint: [اسم أيقونة ذي صلة]]

يرجى التأكد من أن الإجابة مفصلة ومهنية وقابلة للتنفيذ.""",

        ROUTINE_GENERATION: """بناءً على تحليل الشعر المقدم، قم بإنشاء روتين رعاية شعر مخصص. يرجى الرد بتنسيق JSON التالي:

{
  "title": "روتين رعاية الشعر اليومي والأسبوعي المخصص",
  "steps": [
    {
      "title": "[عنوان الخطوة]",
      "description": "[وصف مفصل للخطوة مع تعليمات محددة والتوقيت وتوصيات المنتجات]"
    }
  ]
}

يرجى تقديم 3 خطوات على الأقل تعالج المشاكل المحددة في التحليل. اجعل الروتين عملياً وقابلاً للتحقيق ومخصصاً لحالة شعر المستخدم.""",

        AI_ADVISOR: """أنت مستشار خبير في الشعر وفروة الرأس. يمكنك فقط تقديم النصائح حول الشعر وفروة الرأس ومواضيع العناية بالشعر.
إذا سأل المستخدم عن أي شيء آخر، أعد توجيهه بأدب إلى الأسئلة المتعلقة بالشعر.

مهم: أجب دائماً بنفس لغة سؤال المستخدم.

يرجى تقديم نصائح مفصلة ومفيدة حول مخاوفهم المتعلقة بالشعر. ركز على:
- توصيات العناية بالشعر المهنية
- اقتراحات المنتجات عندما تكون مناسبة
- نصائح وتقنيات التصفيف
- نصائح صحة الشعر والصيانة
- توصيات العناية بفروة الرأس

كن محدداً ومفصلاً وقدم نصائح قابلة للتنفيذ. ابق دائماً في مجال العناية بالشعر.""",

        GENERAL_ANALYSIS: "أنت خبير في الشعر وفروة الرأس. يرجى تحليل صورة الشعر المقدمة والإجابة على سؤال المستخدم. مهم: أجب بنفس لغة سؤال المستخدم.",
    }

    TEMPLATES: Mapping[str, Dict[str, str]] = {"en": EN, "fr": FR, "ar": AR}

    # Labels used when embedding user content
    LABELS = {
        "en": {"images": "Images", "question": "User question", "image": "Image", "analysis": "Hair analysis"},
        "fr": {"images": "Images", "question": "Question de l'utilisateur", "image": "Image", "analysis": "Analyse des cheveux"},
        "ar": {"images": "الصور", "question": "سؤال المستخدم", "image": "الصورة", "analysis": "تحليل الشعر"},
    }

    # Phrases used to steer the model away from its instructions
    INJECTION_PATTERNS = [
        r'ignore\s+(?:all\s+)?(?:previous|prior|above)\s+instructions',
        r'disregard\s+(?:all\s+)?(?:previous|prior|above)\s+instructions',
        r'forget\s+(?:all\s+)?(?:previous|prior|your)\s+instructions',
        r'you\s+are\s+now\s+',
        r'system\s*prompt',
        r'ignore[sz]?\s+(?:les\s+)?instructions\s+pr[ée]c[ée]dentes',
        r'تجاهل\s+(?:جميع\s+)?التعليمات',
        r'</?(?:system|assistant|user)>',
        r'```',
    ]

    _injection_regex = re.compile('|'.join(INJECTION_PATTERNS), re.IGNORECASE)

    @classmethod
    def get(cls, prompt_type: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
        if prompt_type not in PROMPT_TYPES:
            raise ValueError(f"Unknown prompt type: {prompt_type}")
        templates = cls.TEMPLATES.get(language or DEFAULT_LANGUAGE)
        if templates is None:
            logger.debug(f"No prompts for language '{language}', falling back to English")
            templates = cls.EN
        return templates[prompt_type]

    @classmethod
    def _labels(cls, language: Optional[str]) -> Dict[str, str]:
        return cls.LABELS.get(language or DEFAULT_LANGUAGE, cls.LABELS[DEFAULT_LANGUAGE])

    @classmethod
    def _sanitize_content(cls, text: str, max_length: int) -> str:
        """
        Clean user-provided text before it is embedded in a prompt.

        Removes instruction-override phrases and fence markers, collapses
        whitespace and truncates to ``max_length``.
        """
        if not text:
            return ""

        if cls._injection_regex.search(text):
            logger.warning("Detected prompt injection pattern in user content, cleaning...")
            text = cls._injection_regex.sub('[REMOVED]', text)

        text = re.sub(r'\s+', ' ', text).strip()

        if len(text) > max_length:
            logger.warning(f"Truncated user content longer than {max_length} characters")
            text = text[:max_length] + "..."

        return text

    @classmethod
    def _format_image_references(cls, image_references: Mapping[str, str]) -> str:
        ordered = [view for view in IMAGE_VIEWS if image_references.get(view)]
        ordered += sorted(view for view in image_references if view not in IMAGE_VIEWS and image_references[view])
        return "\n".join(f"- {view}: {image_references[view]}" for view in ordered)


def get_prompt(prompt_type: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    """
    Get a prompt template.

    Args:
        prompt_type: One of PROMPT_TYPES
        language: "en", "fr" or "ar"; anything else falls back to English

    Returns:
        Template text

    Raises:
        ValueError: If the prompt type is unknown
    """
    return HairPrompts.get(prompt_type, language)


def build_hair_analysis_prompt(image_references: Mapping[str, str], language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    """Analysis prompt followed by the image URLs, one per view."""
    prompt = get_prompt(HAIR_ANALYSIS, language)
    images = HairPrompts._format_image_references(image_references or {})
    if not images:
        return prompt
    return f"{prompt}\n\n{HairPrompts._labels(language)['images']}:\n{images}"


def build_question_prompt(question: str, language: Optional[str] = DEFAULT_LANGUAGE,
                          image_url: Optional[str] = None) -> str:
    """
    Advisor prompt for a free-form user question.

    With an image the general analysis template is used instead of the
    advisor template.
    """
    labels = HairPrompts._labels(language)
    clean_question = HairPrompts._sanitize_content(question, MAX_QUESTION_LENGTH)

    if image_url:
        prompt = get_prompt(GENERAL_ANALYSIS, language)
        return f"{prompt}\n\n{labels['image']}: {image_url.strip()}\n\n{labels['question']}: {clean_question}"

    prompt = get_prompt(AI_ADVISOR, language)
    return f"{prompt}\n\n{labels['question']}: {clean_question}"


def build_routine_prompt(analysis_text: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    """Routine generation prompt with the earlier analysis appended."""
    labels = HairPrompts._labels(language)
    context = HairPrompts._sanitize_content(analysis_text, MAX_ANALYSIS_CONTEXT_LENGTH)
    return f"{get_prompt(ROUTINE_GENERATION, language)}\n\n{labels['analysis']}:\n{context}"
