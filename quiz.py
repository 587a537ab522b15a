import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import huffman as huff

SYMBOL_TO_CODE = "symbol-to-code"
CODE_TO_SYMBOL = "code-to-symbol"
TREE_PATH = "tree-path"


def display_symbol(symbol: str) -> str:
    return "SPACE" if symbol == " " else symbol


@dataclass
class Question:
    kind: str
    prompt: str
    answer: str
    symbol: Optional[str] = None
    code: Optional[str] = None


def generate_questions(code_map: Dict[str, str], root: Optional[huff.HuffmanNode],
                       limit: int = 10, seed: Optional[int] = None) -> List[Question]:
    if not code_map:
        return []

    questions: List[Question] = []
    for symbol, code in code_map.items():
        questions.append(Question(
            SYMBOL_TO_CODE,
            f"What is the Huffman code for symbol '{display_symbol(symbol)}'?",
            code, symbol=symbol,
        ))
    for symbol, code in code_map.items():
        questions.append(Question(
            CODE_TO_SYMBOL,
            f"Which symbol does the code '{code}' represent?",
            display_symbol(symbol), code=code,
        ))
    for symbol in code_map:
        path = huff.find_path(root, symbol)
        if path: # a single-leaf tree has no path to ask about
            questions.append(Question(
                TREE_PATH,
                f"What is the tree path (0=left, 1=right) to reach symbol '{display_symbol(symbol)}'?",
                path, symbol=symbol,
            ))

    rng = random.Random(seed)
    rng.shuffle(questions)
    return questions[:limit]


def check_answer(question: Question, answer: str) -> bool:
    return answer.strip().lower() == question.answer.lower()


def score(questions: List[Question], answers: List[str]) -> Tuple[int, int]:
    """
    (correct, total) over the questions that got an answer. Extra answers
    are ignored.
    """
    pairs = list(zip(questions, answers))
    correct = sum(1 for q, a in pairs if check_answer(q, a))
    return correct, len(pairs)


def score_percent(correct: int, total: int) -> float:
    if total == 0:
        return 0.0
    return correct / total * 100.0
