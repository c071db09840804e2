subject_fallback = "a professional photographic scene"

technical_quality = (
    "Technical specifications: 8k resolution, photorealistic textures, professional color science, "
    "tack-sharp focus, cinematic composition, high dynamic range (HDR), subtle film grain, "
    "natural skin tones, and sophisticated post-processing."
)

default_negative_prompt = (
    "cartoon, anime, 3d render, illustration, painting, drawing, low quality, blurry, distorted, "
    "watermark, signature, text, bad anatomy, extra limbs, missing fingers, low resolution, grainy, "
    "overexposed, underexposed"
)

midjourney_suffix = " --ar ASPECT_RATIO --v 6.0 --stylize 250"

stable_diffusion_suffix = " (masterpiece:1.2), (photorealistic:1.2), (highly detailed:1.2)"


embellish_instructions = """
You are a world-class photography prompt engineer and AI content policy expert. Take the following base prompt and "juice it up" with extreme detail, professional photography terminology, and atmospheric depth.

<SAFETY_AND_POLICY_RULES>
1. SUBJECT ANONYMITY: Refer to the person as "this person" or "the subject". Do not use specific names or overly descriptive personal identifiers if they feel too intimate.
2. CLOTHING CENSORSHIP: If the base prompt mentions "bikini", "swimwear", "lingerie", "undergarments", or any potentially suggestive clothing, you MUST OMIT the clothing description entirely. Do not replace it with "resort wear" or other fashion terms. Instead, focus the prompt on the environment, lighting physics, skin textures (in a clinical/photographic sense), and the subject's expression/pose.
3. FILTER AVOIDANCE: Avoid any keywords that could be interpreted as suggestive, violent, or sensitive. Use clinical, technical, and artistic terminology (e.g., "anatomical precision", "sub-surface scattering", "chiaroscuro").
4. SUBJECT INTEGRITY: Maintain the core essence of the scene, but strictly follow the censorship rules above.
</SAFETY_AND_POLICY_RULES>

Base Prompt: BASE_PROMPT

Also, generate a concise negative prompt that reinforces these safety standards.

<OUTPUT_FORMAT>
Output your response in the following JSON format:
{
  "prompt": "the refined main prompt",
  "negative": "the refined negative prompt"
}
</OUTPUT_FORMAT>
"""


safety_audit_instructions = """
Review the following AI image generation prompt for strict safety compliance.

<RULES>
1. NO mention of bikinis, lingerie, or undergarments.
2. NO suggestive or intimate clothing descriptions.
3. NO specific personal names.
4. The subject must be referred to as "the subject" or "this person".
</RULES>

If the prompt violates these rules, rewrite it to be 100% safe while preserving the artistic and technical quality. Focus on the environment and lighting.
If the prompt already complies, return it unchanged.

Prompt to Audit: AUDIT_PROMPT

Output ONLY the sanitized prompt text.
"""


analyze_image_instructions = """
Analyze this photograph. Provide a concise, highly descriptive scene description (subject) that captures the core elements, mood, and composition.
Also, suggest the most likely camera gear (body, lens), lighting style, and shot size used.

<ALLOWED_IDS>
suggestedBodyId: BODY_IDS
suggestedLensId: LENS_IDS
suggestedStyleId: STYLE_IDS
suggestedShotSizeId: SHOT_SIZE_IDS
</ALLOWED_IDS>

Return the result in JSON format: { "subject": "...", "suggestedBodyId": "...", "suggestedLensId": "...", "suggestedStyleId": "...", "suggestedShotSizeId": "..." }.
Use only the IDs listed above, but prioritize the 'subject' string.
"""
