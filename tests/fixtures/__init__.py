"""
Test fixtures (JSON payloads).

- sample_product.json: scraped product as sent by the extension
- gemini_generate_response.json: generateContent response envelope
"""
