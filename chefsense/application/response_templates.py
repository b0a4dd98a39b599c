# =========================
# FILE: chefsense/chefsense/application/response_templates.py
# =========================
from __future__ import annotations

import random
import re
from typing import Dict, Optional

_RE_ARABIC = re.compile("[\u0600-\u06FF]")
_LANG_PROFILES = [
    ("fr", re.compile(r"\b(bonjour|merci|recette|cuisine|ingrédients?|étapes?|bonsoir|comment|salut)\b")),
    ("nl", re.compile(r"\b(hallo|dank|bedankt|recept|keuken|ingrediënten|ingrediënt|stap|stappen|eten|hoe)\b")),
    ("en", re.compile(r"\b(hello|hi|please|recipe|cook|step|thanks)\b")),
]

SPEECH_LANG_CODES = {"ar": "ar-SA", "fr": "fr-FR", "nl": "nl-NL", "en": "en-US"}

UNAVAILABLE_MESSAGE = "Unable to load recipes. Please refresh and try again."

LANG_PACKS: Dict[str, Dict[str, str]] = {
    "en": {
        "greeting": "👨‍🍳 Chef's tip coming right up!",
        "stepsTitle": "Let me walk you through it",
        "ingredientsTitle": "What you'll need",
        "nutritionTitle": "Nutrition breakdown",
        "swapsTitle": "Healthy swaps I recommend",
        "allergenTitle": "Heads up on allergens",
        "suggestionsTitle": "More tasty ideas for you",
        "tipsTitle": "Chef's secrets",
        "timeTitle": "Timing",
        "favoritesTitle": "Your saved recipes",
        "calories": "Calories",
        "protein": "Protein",
        "carbs": "Carbs",
        "fat": "Fat",
        "fallbackNutrition": "Roughly 520 kcal per serving with balanced macros.",
        "noAllergens": "Looks allergy-friendly! No common allergens spotted.",
        "contains": "Contains",
        "askClarify": "What else can I help you cook today?",
        "pantryIntro": "Great ingredients! Here is what we can make",
        "pantryMatchesTitle": "My top picks for you",
        "bestMatch": "Chef's choice",
        "uses": "Uses",
        "viewRecipe": "👉 View full recipe",
        "noMatches": "Hmm, tricky combo! But let me suggest some flexible ideas.",
        "nutritionSummaryLead": "Quick nutrition facts",
        "whichRecipe": "Which dish do you mean? Tell me a recipe name and I'll take it from there.",
        "noFavorites": "You haven't saved any favorites yet. Tap the 🤍 on a recipe card to keep it here.",
        "noTips": "No special tips for this one, just taste as you go and season at the end.",
        "totalTime": "Total time",
        "prep": "prep",
        "cook": "cook",
        "minutes": "min",
        "serves": "Serves",
        "yes": "Yes!",
        "no": "Not quite.",
        "helpTitle": "I'm not sure I caught that. Try asking me:",
    },
    "fr": {
        "greeting": "Voici un plan clair et professionnel :",
        "stepsTitle": "Instructions étape par étape",
        "ingredientsTitle": "Ingrédients nécessaires",
        "nutritionTitle": "Notes nutrition & santé",
        "swapsTitle": "Substituts plus sains",
        "allergenTitle": "Allergènes à surveiller",
        "suggestionsTitle": "Recettes correspondantes",
        "tipsTitle": "Astuces du chef",
        "timeTitle": "Temps de préparation",
        "favoritesTitle": "Vos recettes enregistrées",
        "calories": "Calories",
        "protein": "Protéines",
        "carbs": "Glucides",
        "fat": "Lipides",
        "fallbackNutrition": "Calories estimées : ~520 kcal avec un équilibre en macronutriments.",
        "noAllergens": "Aucun allergène majeur détecté parmi les ingrédients indiqués.",
        "contains": "Contient",
        "askClarify": "Indiquez un ingrédient ou une cuisine et je préciserai davantage.",
        "pantryIntro": "Voici ce que vous pouvez cuisiner avec",
        "pantryMatchesTitle": "Sélections par ingrédients",
        "bestMatch": "Meilleure option",
        "uses": "Utilise",
        "viewRecipe": "👉 Voir la recette",
        "noMatches": "Je n'ai pas trouvé d'équivalent direct, voici des idées flexibles à essayer.",
        "nutritionSummaryLead": "Notes nutrition & santé",
        "whichRecipe": "De quel plat parlez-vous ? Donnez-moi le nom d'une recette.",
        "noFavorites": "Vous n'avez encore aucun favori.",
        "totalTime": "Temps total",
        "serves": "Portions",
        "yes": "Oui !",
        "no": "Pas vraiment.",
        "helpTitle": "Je n'ai pas bien compris. Essayez par exemple :",
    },
    "nl": {
        "greeting": "Hier is een duidelijk plan:",
        "stepsTitle": "Stapsgewijze instructies",
        "ingredientsTitle": "Wat je nodig hebt",
        "nutritionTitle": "Voeding & gezondheidsnotities",
        "swapsTitle": "Gezonde vervangingen",
        "allergenTitle": "Allergeen waarschuwing",
        "suggestionsTitle": "Receptsuggesties",
        "tipsTitle": "Tips van de chef",
        "timeTitle": "Bereidingstijd",
        "favoritesTitle": "Je bewaarde recepten",
        "calories": "Calorieën",
        "protein": "Eiwit",
        "carbs": "Koolhydraten",
        "fat": "Vet",
        "fallbackNutrition": "Geschatte calorieën: ~520 kcal met gebalanceerde macro’s.",
        "noAllergens": "Geen grote allergenen gevonden in de genoemde ingrediënten.",
        "contains": "Bevat",
        "askClarify": "Noem een belangrijk ingrediënt of keuken en ik verfijn het meteen.",
        "pantryIntro": "Dit kun je koken met",
        "pantryMatchesTitle": "Suggesties op basis van ingrediënten",
        "bestMatch": "Beste match",
        "uses": "Gebruikt",
        "viewRecipe": "👉 Bekijk recept",
        "noMatches": "Geen directe match gevonden; hier zijn toch een paar ideeën.",
        "nutritionSummaryLead": "Voeding & gezondheid",
        "whichRecipe": "Welk gerecht bedoel je? Noem een receptnaam.",
        "noFavorites": "Je hebt nog geen favorieten bewaard.",
        "totalTime": "Totale tijd",
        "serves": "Porties",
        "yes": "Ja!",
        "no": "Niet helemaal.",
        "helpTitle": "Dat begreep ik niet helemaal. Probeer bijvoorbeeld:",
    },
    "ar": {
        "greeting": "إليك خطة واضحة واحترافية:",
        "stepsTitle": "خطوات مرقمة للتحضير",
        "ingredientsTitle": "المكونات المطلوبة",
        "nutritionTitle": "ملاحظات التغذية والصحة",
        "swapsTitle": "بدائل صحية للمكونات",
        "allergenTitle": "تحذير من مسببات الحساسية",
        "suggestionsTitle": "وصفات مقترحة",
        "tipsTitle": "نصائح الشيف",
        "timeTitle": "وقت التحضير",
        "favoritesTitle": "وصفاتك المحفوظة",
        "calories": "سعرات حرارية",
        "protein": "بروتين",
        "carbs": "كربوهيدرات",
        "fat": "دهون",
        "fallbackNutrition": "تقدير السعرات: حوالي 520 سعرة مع توازن في العناصر الغذائية.",
        "noAllergens": "لا توجد مسببات حساسية بارزة بين المكونات المذكورة.",
        "contains": "يحتوي على",
        "askClarify": "شارك مكوناً أو مطبخاً مفضلاً لأخصص الإجابة أكثر.",
        "pantryIntro": "إليك ما يمكن طهيه باستخدام",
        "pantryMatchesTitle": "اقتراحات مبنية على المكونات",
        "bestMatch": "الخيار الأقرب",
        "uses": "يستخدم",
        "viewRecipe": "👉 عرض الوصفة",
        "noMatches": "لم أجد وصفة مطابقة تماماً، هذه أفكار مرنة لتجربتها.",
        "nutritionSummaryLead": "ملاحظات غذائية وصحية",
        "whichRecipe": "أي طبق تقصد؟ اذكر اسم الوصفة.",
        "noFavorites": "لم تحفظ أي وصفة مفضلة بعد.",
        "totalTime": "الوقت الإجمالي",
        "serves": "عدد الحصص",
        "yes": "نعم!",
        "no": "ليس تماماً.",
        "helpTitle": "لم أفهم تماماً. جرّب أن تسأل:",
    },
}

HELP_EXAMPLES = [
    '"What can I cook with chicken, rice and onions?"',
    '"How do I make Pad Thai?"',
    '"How many calories are in Butter Chicken?"',
    '"Show me a quick vegetarian dinner"',
    '"What can I use instead of butter?"',
]

GENERIC_TIPS = [
    "Read the whole recipe before you start and prep everything first.",
    "Season in layers and taste at every stage.",
    "Let meat rest after cooking so the juices settle.",
]


def _pick(options: list[str], rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(options)


def detect_language(text: str) -> str:
    if _RE_ARABIC.search(text or ""):
        return "ar"
    normalized = (text or "").lower()
    for lang, pattern in _LANG_PROFILES:
        if pattern.search(normalized):
            return lang
    return "en"


def get_lang_pack(lang: str) -> Dict[str, str]:
    # untranslated keys fall back to English
    return {**LANG_PACKS["en"], **LANG_PACKS.get(lang, {})}


def is_rtl(lang: str) -> bool:
    return lang == "ar"


def speech_lang_code(lang: str) -> str:
    return SPEECH_LANG_CODES.get(lang, "en-US")


def welcome_reply(recipe_count: int) -> str:
    return (
        "## 👨‍🍳 Hello! I'm ChefSense, your personal chef & nutrition expert!\n\n"
        f"Ready to cook something amazing? I know **{recipe_count} recipes** from around the world. "
        "Just tell me what you have!\n\n"
        "**What I can do:**\n"
        '• 🍳 "I only have chicken, onions and rice" → Get 2-4 smart recipe ideas with steps\n'
        "• 🥗 Show calories, protein, fat, carbs & allergen info for any dish\n"
        "• 💡 Suggest healthy swaps like olive oil for butter or quinoa for rice\n"
        "• 📝 Walk you through any recipe step-by-step\n\n"
        '**Try asking:** "What can I cook with pasta and tomatoes?" or "Show me a quick vegetarian dinner"'
    )


def greet_reply(lang: str = "en", rng: Optional[random.Random] = None) -> str:
    options = {
        "en": [
            "Hello! 👋 What are we cooking today?",
            "Hi there! Tell me a dish or the ingredients you have and I'll help you cook.",
        ],
        "fr": ["Bonjour ! 👋 Qu'est-ce qu'on cuisine aujourd'hui ?"],
        "nl": ["Hallo! 👋 Wat gaan we vandaag koken?"],
        "ar": ["مرحباً! 👋 ماذا سنطبخ اليوم؟"],
    }
    return _pick(options.get(lang, options["en"]), rng)


def help_reply(lang: str = "en") -> str:
    pack = get_lang_pack(lang)
    lines = [pack["helpTitle"]]
    lines.extend(f"• {ex}" for ex in HELP_EXAMPLES)
    return "\n".join(lines)
