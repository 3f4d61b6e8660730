"""Intent reads.

The intents layer turns raw Realtime Database documents into the payloads served by the API:
workspace intent listings, example utterances, and example search.
"""
