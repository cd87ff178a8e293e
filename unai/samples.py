"""
Demo texts dense with the catalog's clichés, one per language.
Served by GET /samples and used as fixtures in the tests.
"""

DEMO_ZH = """值得注意的是，在今天快速发展的AI领域中，这不仅仅是一个技术问题，更是一个关于人类未来的深刻议题。让我们深入探讨这个话题。

事实上，ChatGPT的写作模式不是简单的文字生成，而是一种复杂的语言模型运作。简单来说，它会倾向于使用特定的句式和表达方式。

总而言之，我们需要认识到AI写作的局限性，不仅要关注其能力，而且要关注其带来的潜在风险。毫无疑问，这是一个值得我们深思的问题。"""

DEMO_EN = """It's worth noting that in today's rapidly evolving landscape of artificial intelligence, this is not just a technological challenge, but a profound question about the future of humanity. Let's delve into this topic.

Furthermore, it's important to understand that ChatGPT's writing patterns are not simply text generation, but rather a complex language model operation. Moreover, it tends to favor specific sentence structures and expressions.

In conclusion, we need to recognize the limitations of AI writing. This is not just about its capabilities, but also about the potential risks it brings. Ultimately, this is a question that deserves our careful consideration."""

SAMPLES = {
    "zh": DEMO_ZH,
    "en": DEMO_EN,
}
