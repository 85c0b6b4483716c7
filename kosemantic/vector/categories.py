"""
Hand-curated semantic categories for the fallback estimator.
Word order within a group matters: neighbours in a list are closer in meaning.
"""

from typing import Dict, FrozenSet, List, Optional, Tuple

SEMANTIC_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "family": (
        '가족', '집안', '가정', '부모', '자녀', '형제', '자매', '조부모', '사촌', '친척',
        '아버지', '어머니', '엄마', '아빠', '아들', '딸', '형', '누나', '언니', '동생',
        '할아버지', '할머니', '삼촌', '이모', '고모', '남편', '아내',
    ),
    "people": ('사람', '사람들', '인간', '개인', '친구', '동료', '지인', '이웃', '시민', '연인'),
    "education": (
        '학교', '교육', '공부', '선생님', '학생', '수업', '시험', '숙제', '대학', '교실',
        '책', '학습', '과목', '수학', '과학', '역사', '언어', '문학', '졸업', '입학', '성적',
    ),
    "food": (
        '음식', '요리', '밥', '식당', '맛', '반찬', '국물', '국', '김치', '간식', '녹차',
        '커피', '사과', '바나나', '빵', '고기', '생선', '야채', '과일', '물', '우유', '차', '술',
    ),
    "emotion": (
        '사랑', '마음', '감정', '기분', '느낌', '행복', '기쁨', '슬픔', '화', '걱정', '불안',
        '평화', '희망', '꿈', '추억', '그리움', '외로움',
    ),
    "place": (
        '집', '방', '건물', '아파트', '마을', '도시', '나라', '세계', '지구', '회사', '병원',
        '상점', '공원', '도서관', '극장', '시장', '역', '공항', '호텔', '카페', '은행', '우체국',
    ),
    "time": (
        '시간', '날짜', '년도', '계절', '오늘', '내일', '어제', '미래', '과거', '현재', '순간',
        '아침', '점심', '저녁', '밤', '새벽', '주말', '휴일', '생일', '기념일',
    ),
    "nature": (
        '자연', '환경', '나무', '숲', '산', '바다', '강', '하늘', '구름', '꽃', '잎', '햇빛',
        '달', '별', '태양', '동물', '식물',
    ),
    "weather": (
        '날씨', '비', '눈', '바람', '구름', '햇살', '천둥', '번개', '안개', '무지개', '더위',
        '추위', '봄', '여름', '가을', '겨울',
    ),
    "transport": (
        '자동차', '버스', '지하철', '기차', '비행기', '자전거', '오토바이', '택시', '트럭', '배',
        '길', '도로', '다리', '터널', '운전', '교통', '여행',
    ),
    "animal": (
        '고양이', '강아지', '새', '물고기', '사자', '호랑이', '코끼리', '토끼', '곰', '여우',
        '말', '소', '돼지', '양', '닭', '오리', '거북이', '뱀', '개구리', '나비',
    ),
    "sports": (
        '운동', '축구', '야구', '농구', '테니스', '수영', '달리기', '골프', '배드민턴', '탁구',
        '배구', '권투', '태권도', '스키', '등산', '요가', '경기', '선수', '승리',
    ),
    "work": (
        '일', '직업', '사업', '경제', '돈', '가격', '비용', '수입', '월급', '급여', '투자',
        '업무', '회의', '출근', '퇴근', '직원', '사장', '고객',
    ),
    "tech": (
        '기술', '컴퓨터', '인터넷', '프로그램', '데이터', '인공지능', '로봇', '휴대폰',
        '스마트폰', '게임', '웹사이트', '앱', '소프트웨어', '하드웨어', '전자', '디지털',
    ),
    "health": (
        '건강', '의사', '간호사', '약', '몸', '정신', '치료', '수술', '검사', '진료', '응급',
        '예방', '회복',
    ),
    "art": (
        '예술', '음악', '노래', '악기', '피아노', '기타', '드럼', '춤', '그림', '사진', '영화',
        '드라마', '연극', '소설', '시', '만화', '미술', '공연', '콘서트', '박물관',
    ),
    "color": (
        '색깔', '빨간색', '파란색', '노란색', '초록색', '검은색', '흰색', '보라색', '분홍색',
        '주황색', '갈색', '회색', '금색', '은색',
    ),
}

# Unordered pairs of categories whose members are loosely related
RELATED_CATEGORIES: FrozenSet[FrozenSet[str]] = frozenset(
    frozenset(pair) for pair in (
        ("family", "emotion"),
        ("family", "people"),
        ("nature", "weather"),
        ("nature", "animal"),
        ("work", "education"),
        ("health", "sports"),
        ("art", "emotion"),
        ("place", "transport"),
    )
)


def categories_of(word: str, categories: Dict[str, Tuple[str, ...]] = None) -> List[str]:
    """Names of every category containing the word."""
    categories = categories if categories is not None else SEMANTIC_CATEGORIES
    return [name for name, words in categories.items() if word in words]


def shared_category(word1: str, word2: str, categories: Dict[str, Tuple[str, ...]] = None) -> Optional[Tuple[str, int]]:
    """
    Find the closest category shared by both words.

    Returns:
        (category name, positional distance within the group) for the group
        where the two words sit closest, or None
    """
    categories = categories if categories is not None else SEMANTIC_CATEGORIES
    best = None
    for name, words in categories.items():
        if word1 in words and word2 in words:
            distance = abs(words.index(word1) - words.index(word2))
            if best is None or distance < best[1]:
                best = (name, distance)
    return best


def related_categories(word1: str, word2: str, categories: Dict[str, Tuple[str, ...]] = None) -> bool:
    """True when the words belong to two categories marked as related."""
    cats1 = categories_of(word1, categories)
    cats2 = categories_of(word2, categories)
    return any(frozenset((a, b)) in RELATED_CATEGORIES for a in cats1 for b in cats2 if a != b)
