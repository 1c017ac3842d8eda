"""Prompt templates for the assistant and image models.

These templates use {placeholder} syntax for string formatting.
"""

# =============================================================================
# Scenario Planner Templates
# =============================================================================

SCENARIO_BRIEF = """\
You are a world-class UGC strategist tasked with planning lifestyle photo shoots for an AI image generator.

Product name: {product_name}
Product niche: {niche}
Audience: {audience}
Product details: {product_details}
Desired vibe or tone: {tone}
Visual style preference: {visual_style}
Shots requested: {shots}
Focus on product (1-5): {focus_on_product}
Extra considerations: {additional_notes}

Produce exactly six distinct scenarios for capturing short-form UGC images. \
Each scenario must reference the product authentically, highlight the audience pain point, \
and include specific visual cues (camera angle, environment, lighting, props).\
Return the answer as JSON that matches this TypeScript type strictly: \
{{"scenarios": [{{"id": string, "title": string, "summary": string, "setting"?: string, "shotList"?: string[], "hook"?: string}}]}}.
"""

SCENARIO_RUN_INSTRUCTIONS = (
    "Respond only with valid JSON. Do not include markdown code fences. "
    "Focus on high-converting, platform-ready UGC concepts."
)

# =============================================================================
# Image Renderer Templates
# =============================================================================

IMAGE_PROMPT = (
    "Create a photorealistic UGC marketing photo for {product_name}. "
    "Scenario title: {title}. {summary}. {setting}. {shot_list} "
    "The audience should immediately understand how it solves their need. "
    "Keep the composition authentic, candid, and ready for social media. "
    "{notes}"
)

SHOT_LIST_LINE = "Key shots: {shots}."

MOTION_NOTE = "Add subtle motion-friendly composition cues"
RETOUCH_NOTE = "Ensure the product looks polished and retouched"
CAPTIONS_NOTE = "Include natural caption overlay space in the composition"
