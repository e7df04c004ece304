"""Stop-word lexicon used by the normalizer.

Stop-words act as phrase boundaries for bigram counting, so this list is
deliberately broader than a grammatical stop list: besides pronouns and
auxiliaries it removes linking verbs ("stays", "becomes"), generic sentiment
adjectives, connectors, quantifiers and review filler nouns. What is left is
mostly topic vocabulary.
"""

# Pronouns & standard grammar
_GRAMMAR = {
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your", "yours",
    "yourself", "yourselves", "he", "him", "his", "himself", "she", "her", "hers", "herself",
    "it", "its", "itself", "they", "them", "their", "theirs", "themselves", "what", "which",
    "who", "whom", "this", "that", "these", "those", "am", "is", "are", "was", "were", "be",
    "been", "being", "have", "has", "had", "having", "do", "does", "did", "doing", "a", "an",
    "the", "and", "but", "if", "or", "because", "as", "until", "while", "of", "at", "by",
    "for", "with", "about", "against", "between", "into", "through", "during", "before",
    "after", "above", "below", "to", "from", "up", "down", "in", "out", "on", "off", "over",
    "under", "again", "further", "then", "once", "here", "there", "when", "where", "why",
    "how", "all", "any", "both", "each", "few", "more", "most", "other", "some", "such", "no",
    "nor", "not", "only", "own", "same", "so", "than", "too", "very", "s", "t", "can", "will",
    "just", "don", "dont", "should", "now", "could", "would", "also", "even", "still", "yet",
    "cant", "wont", "didnt", "doesnt", "isnt", "wasnt", "arent", "werent", "im", "ive",
}

# Generic verbs / actions
_VERBS = {
    "get", "got", "getting", "buy", "buying", "bought", "make", "made", "makes", "go", "going",
    "went", "use", "used", "using", "try", "tried", "trying", "know", "think", "thought", "say",
    "said", "look", "looking", "want", "wanted", "need", "needed", "recommend", "purchased",
    "ordered", "received", "arrived", "come", "came", "take", "took", "give", "gave",
}

# Linking verbs & states
_LINKING = {
    "stay", "stays", "stayed", "become", "becomes", "becoming", "seem", "seems", "seemed",
    "feel", "feels", "felt", "keep", "keeps", "kept", "turn", "turns", "turned",
}

# Generic sentiment (polarity, not topic)
_SENTIMENT = {
    "good", "bad", "great", "terrible", "awful", "amazing", "love", "hate", "liked",
    "disliked", "best", "worst", "better", "worse", "nice", "fine", "ok", "okay", "excellent",
    "poor", "perfect", "definitely", "absolutely", "honest", "honestly", "worth",
    "disappointed", "impressive",
}

# Adverbs / connectors / quantifiers
_CONNECTORS = {
    "however", "although", "though", "similarly", "finally", "actually", "basically",
    "literally", "really", "probably", "maybe", "perhaps", "instead", "anyway", "meanwhile",
    "therefore", "thus", "hence", "much", "many", "lot", "lots", "bit", "little", "whole",
    "entire", "another", "every", "everything",
}

# Context fillers
_FILLERS = {
    "product", "item", "review", "reviews", "thing", "things", "stuff", "way", "amazon",
    "star", "stars", "day", "days", "time", "times", "list",
}

STOP_WORDS = frozenset(_GRAMMAR | _VERBS | _LINKING | _SENTIMENT | _CONNECTORS | _FILLERS)
