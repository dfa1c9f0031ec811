"""Static administrative region catalog.

City → district → neighborhood is a two-level mapping; sub-villages (리) are
keyed by neighborhood and only exist for 읍/면 areas. Neighborhoods absent
from the village table have no village level.

Every lookup is total: unknown keys yield an empty list.
"""
from __future__ import annotations

_REGIONS: dict[str, dict[str, list[str]]] = {
    "서울특별시": {
        "강남구": ["역삼동", "삼성동", "대치동", "논현동", "압구정동", "청담동", "개포동"],
        "서초구": ["서초동", "반포동", "잠원동", "방배동", "양재동"],
        "송파구": ["잠실동", "신천동", "가락동", "문정동", "방이동"],
        "마포구": ["공덕동", "아현동", "합정동", "망원동", "상암동"],
        "노원구": ["상계동", "중계동", "하계동", "월계동", "공릉동"],
    },
    "부산광역시": {
        "해운대구": ["우동", "중동", "좌동", "송정동", "재송동"],
        "수영구": ["광안동", "남천동", "민락동", "망미동"],
        "기장군": ["기장읍", "장안읍", "정관읍", "일광읍", "철마면"],
    },
    "인천광역시": {
        "연수구": ["송도동", "연수동", "청학동", "동춘동"],
        "부평구": ["부평동", "산곡동", "청천동", "삼산동"],
        "강화군": ["강화읍", "선원면", "불은면", "길상면"],
    },
    "경기도": {
        "수원시 영통구": ["매탄동", "원천동", "영통동", "광교동"],
        "성남시 분당구": ["정자동", "서현동", "이매동", "수내동", "야탑동"],
        "화성시": ["동탄1동", "동탄2동", "봉담읍", "향남읍", "남양읍", "서신면"],
        "양평군": ["양평읍", "강상면", "양서면", "서종면"],
        "용인시 처인구": ["포곡읍", "모현읍", "이동읍", "남사읍", "원삼면"],
    },
    "강원특별자치도": {
        "춘천시": ["효자동", "석사동", "퇴계동", "신북읍", "동면"],
        "원주시": ["단계동", "무실동", "문막읍", "지정면"],
        "홍천군": ["홍천읍", "화촌면", "북방면"],
    },
    "충청남도": {
        "천안시 동남구": ["신방동", "청당동", "목천읍", "병천면"],
        "아산시": ["온양1동", "배방읍", "탕정면", "음봉면"],
    },
    "전라남도": {
        "나주시": ["빛가람동", "남평읍", "산포면"],
        "담양군": ["담양읍", "봉산면", "창평면"],
    },
    "경상북도": {
        "경주시": ["황성동", "용강동", "안강읍", "외동읍"],
        "칠곡군": ["왜관읍", "북삼읍", "석적읍"],
    },
    "제주특별자치도": {
        "제주시": ["일도1동", "노형동", "연동", "애월읍", "조천읍", "한림읍"],
        "서귀포시": ["서귀동", "중문동", "대정읍", "남원읍", "성산읍"],
    },
}

_VILLAGES: dict[str, list[str]] = {
    "기장읍": ["대라리", "동부리", "서부리", "청강리", "대변리"],
    "장안읍": ["좌천리", "월내리", "길천리", "임랑리"],
    "정관읍": ["매학리", "모전리", "달산리", "용수리"],
    "일광읍": ["이천리", "삼성리", "학리", "칠암리"],
    "철마면": ["백길리", "장전리", "와여리", "고촌리"],
    "강화읍": ["관청리", "갑곶리", "신문리", "옥림리"],
    "선원면": ["선행리", "냉정리", "창리", "연리"],
    "불은면": ["삼성리", "두운리", "오두리", "넙성리"],
    "길상면": ["온수리", "초지리", "선두리", "장흥리"],
    "봉담읍": ["수영리", "동화리", "와우리", "상리", "분천리"],
    "향남읍": ["발안리", "평리", "구문천리", "하길리"],
    "남양읍": ["남양리", "북양리", "신남리", "활초리"],
    "서신면": ["궁평리", "백미리", "전곡리", "송교리"],
    "양평읍": ["양근리", "오빈리", "창대리", "회현리"],
    "강상면": ["병산리", "교평리", "세월리", "화양리"],
    "양서면": ["양수리", "용담리", "목왕리", "복포리"],
    "서종면": ["문호리", "서후리", "수능리", "정배리"],
    "포곡읍": ["둔전리", "삼계리", "전대리", "마성리"],
    "모현읍": ["일산리", "왕산리", "오산리", "갈담리"],
    "이동읍": ["송전리", "천리", "묵리", "덕성리"],
    "남사읍": ["아곡리", "봉명리", "창리", "완장리"],
    "원삼면": ["고당리", "독성리", "사암리", "좌항리"],
    "신북읍": ["천전리", "유포리", "율문리", "산천리"],
    "동면": ["만천리", "장학리", "지내리", "감정리"],
    "문막읍": ["문막리", "동화리", "건등리", "포진리"],
    "지정면": ["가곡리", "보통리", "안창리", "월송리"],
    "홍천읍": ["희망리", "연봉리", "태학리", "상오안리"],
    "화촌면": ["성산리", "군업리", "구성포리", "외삼포리"],
    "북방면": ["하화계리", "상화계리", "성동리", "구만리"],
    "목천읍": ["신계리", "교촌리", "서리", "응원리"],
    "병천면": ["병천리", "가전리", "관성리", "탑원리"],
    "배방읍": ["장재리", "공수리", "북수리", "휴대리"],
    "탕정면": ["명암리", "매곡리", "호산리", "갈산리"],
    "음봉면": ["산동리", "소동리", "의식리", "동암리"],
    "남평읍": ["남석리", "동사리", "수원리", "대교리"],
    "산포면": ["산제리", "신도리", "매성리", "덕례리"],
    "담양읍": ["객사리", "지침리", "백동리", "천변리"],
    "봉산면": ["기곡리", "삼지리", "와우리", "양지리"],
    "창평면": ["창평리", "삼천리", "유천리", "해곡리"],
    "안강읍": ["산대리", "양월리", "육통리", "옥산리"],
    "외동읍": ["입실리", "모화리", "괘릉리", "냉천리"],
    "왜관읍": ["왜관리", "석전리", "매원리", "봉계리"],
    "북삼읍": ["인평리", "율리", "숭오리", "어로리"],
    "석적읍": ["중리", "남율리", "포남리", "망정리"],
    "애월읍": ["애월리", "곽지리", "하귀1리", "상귀리"],
    "조천읍": ["조천리", "함덕리", "신촌리", "북촌리"],
    "한림읍": ["한림리", "협재리", "금악리", "귀덕리"],
    "대정읍": ["하모리", "상모리", "보성리", "안성리"],
    "남원읍": ["남원리", "위미리", "태흥리", "신례리"],
    "성산읍": ["성산리", "고성리", "온평리", "신양리"],
}


def cities() -> list[str]:
    return list(_REGIONS)


def districts_of(city: str) -> list[str]:
    return list(_REGIONS.get(city, {}))


def neighborhoods_of(city: str, district: str) -> list[str]:
    return list(_REGIONS.get(city, {}).get(district, []))


def villages_of(neighborhood: str) -> list[str]:
    """Villages under *neighborhood*; empty means the level does not apply."""
    return list(_VILLAGES.get(neighborhood, []))


def has_villages(neighborhood: str) -> bool:
    return neighborhood in _VILLAGES
