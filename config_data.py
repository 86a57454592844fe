# config_data.py

ABOUT_APP_TEXT = """
### Life Planning Simulators
将来の不確実性に、確かな備えを。

公的年金と必要保障額を可視化するシミュレーションツールです。

* **基本情報設定**: 家族構成、収入、加入年金制度などの基本情報を設定します。すべてのシミュレーションの基礎となります。
* **遺族年金シミュレーター**: 万が一の際に遺族が受け取れる公的年金（遺族基礎年金・遺族厚生年金）の受給額と期間を試算します。
* **障害年金シミュレーター**: 病気や怪我で障害状態になった場合に受け取れる障害年金（基礎・厚生）の目安を試算します。
* **必要保障額シミュレーター**: 公的年金・就労収入・手当を差し引いた、保険で備えるべき不足額を試算します。
* **家計のリスク分析**: 保険で備えるリスクと貯蓄で備えるリスクを、費用感と発生頻度で整理します。
* **死亡・障害の確率**: 20歳から65歳までに経済的活動ができなくなる確率を年齢別に確認します。
* **リスク整理ワーク**: リスクカードをマトリクス上に配置する共同ワークボードです。

**Note:** 本ツールは概算のシミュレーションであり、公的給付の受給資格や金額を決定するものではありません。
"""

DISCLAIMER_INTRO = (
    "このシミュレーションは、お客様の保障の現状を概算で把握し、保険提案のたたき台を作成するためのものです。"
    "実際の公的給付額や将来の必要額とは異なる場合がありますので、必ず以下の点をご理解のうえご参照ください。"
)

DISCLAIMER_SECTIONS = [
    {'Section': '1. 概算・現状ベースの計算に関する注意', 'Items': [
        ('現在の情報に基づく概算です', '本シミュレーションは、「現在の生活状況、現在の給与水準」に基づいて計算しています。将来の昇給、退職金、企業年金、その他の資産の増加などは一切反映されておりません。'),
        ('物価上昇率・金利は考慮していません', '将来の物価上昇（インフレ）や金利の変動は考慮していません。このため、将来の「不足額」は、物価上昇の影響を受けてさらに大きくなる可能性があります。'),
        ('概算の計算式を適用しています', '入力された「年収」を基に、公的年金制度上の「平均報酬月額」を推定し、計算式に当てはめて公的給付額を算出しています。実際の受給額は、加入期間、保険料納付状況によって必ず異なります。'),
        ('加入期間の特例に関する注意', '遺族年金および障害年金の給付額計算において、年金加入期間が25年（300カ月）未満の場合は特例として300カ月と見なして計算していますが、実際の受給資格や金額は、個別の加入履歴に基づき日本年金機構が決定します。'),
    ]},
    {'Section': '2. 公的給付の変動に関する注意', 'Items': [
        ('将来の制度改正リスク', '公的年金や児童手当、児童扶養手当などの公的給付制度は、将来的に改正される可能性があります。改正された場合、このシミュレーションで算出した給付額とは異なる金額となる可能性があります。'),
        ('お客様の加入時期により給付額が変わります', '遺族年金や障害年金の受給金額は、過去の年金加入期間や厚生年金への加入時期によって細かく変動します。'),
        ('所得制限による変動', '児童扶養手当や公的年金には、遺族となる方の所得に応じた制限があります。個別の所得状況によっては給付額が変動します。'),
    ]},
    {'Section': '3. その他（最終確認事項）', 'Items': [
        ('保険商品の選定は最終判断ではありません', 'このシミュレーション結果は、お客様に「必要な保障額」という目標額を提示するものであり、特定の保険商品への加入を推奨するものではありません。'),
        ('最終確認は年金機構へ', '遺族年金や障害年金などの公的給付の正確な受給資格や金額については、必ず日本年金機構にご確認ください。'),
    ]},
]

SURVIVOR_RULES_DATA = [
    {'給付': '遺族基礎年金', '対象': '18歳到達年度末までの子のある配偶者', '金額': '816,000円 + 子の加算（1・2人目 234,800円、3人目以降 78,300円）'},
    {'給付': '遺族厚生年金', '対象': '厚生年金加入者の遺族', '金額': '報酬比例部分の3/4（加入300月未満は300月とみなす）'},
    {'給付': '中高齢寡婦加算', '対象': '子のない40〜64歳の妻', '金額': '612,000円'},
    {'給付': '遺族厚生年金（30歳未満の妻）', '対象': '子のない30歳未満の妻', '金額': '5年間の有期給付'},
    {'給付': '遺族厚生年金（夫）', '対象': '妻の死亡時に55歳以上の夫', '金額': '60歳から支給（55〜59歳は停止）'},
    {'給付': '2028年改正案', '対象': '子のない60歳未満の配偶者（男女共通）', '金額': '5年間の有期給付、中高齢寡婦加算は段階的に廃止'},
]

# --- Household risk analysis ---

RISK_MATRIX_QUADRANTS = [
    {'Quadrant': '影響度: 高 / 発生頻度: 低', 'Advice': '保険による備えが必須の領域', 'Risks': ['risk-a-1', 'risk-a-2', 'risk-a-3', 'risk-a-4', 'risk-a-5', 'risk-a-6']},
    {'Quadrant': '影響度: 高 / 発生頻度: 高', 'Advice': '予防努力と貯蓄/保険が重要な領域', 'Risks': ['risk-a-7', 'risk-a-8', 'risk-a-9']},
    {'Quadrant': '影響度: 低 / 発生頻度: 低', 'Advice': '貯蓄で対応するか、損失を許容する領域', 'Risks': ['risk-b-1', 'risk-b-2']},
    {'Quadrant': '影響度: 低 / 発生頻度: 高', 'Advice': '貯蓄（生活防衛資金）で対応すべき領域', 'Risks': ['risk-b-3', 'risk-b-4', 'risk-b-5', 'risk-b-6']},
]

ZONE_A_DESCRIPTION = "「影響度が甚大」で、貯蓄だけではカバーしきれないリスク。一度起これば生活が破綻する可能性があるため、保険による備えが合理的です。"
ZONE_B_DESCRIPTION = "「影響度が限定的」で、貯蓄（生活防衛資金）で十分対応可能なリスク。保険で備えようとすると、保険料が割高になる可能性が高いです。"

ZONE_A_RISKS = [
    {'Id': 'risk-a-1', 'Title': '1. 火災などの住宅損傷', 'Chart Label': '火災 (再建)', 'Cost Estimate': 25000000,
     'Cost': '住宅の再建・修繕費用、家財の買い替え費用。数千万円単位。（失火責任法により、隣家からの延焼では原則賠償請求できない）',
     'Frequency': '建物火災の発生件数は年間約2万件（令和4年）。水災（台風・豪雨）のリスクも増加。',
     'Evidence': '消防庁「消防白書」、住宅金融支援機構（住宅価格データ）',
     'Rationale': '発生確率は低いが、被害額が極めて高額（数千万円単位）。生活の基盤そのものを失うリスクであり、貯蓄（住宅ローン返済と並行）での再建は困難。'},
    {'Id': 'risk-a-2', 'Title': '2. 交通事故による高額賠償', 'Chart Label': '交通事故 (高額例)', 'Cost Estimate': 50000000,
     'Cost': '死亡・重度後遺障害の場合、数億円の賠償命令（過去の判例では5億円超も）。自賠責保険（死亡時3,000万円）では全く足りない。',
     'Frequency': '交通事故発生件数（令和5年）は約30万件。高額賠償に至る確率は低いが、ゼロではない。',
     'Evidence': '損害保険料率算出機構「自動車保険の概況」、警察庁「交通統計」、裁判所判例',
     'Rationale': '発生確率は低いが、一度発生した場合の賠償額が「数億円」と、個人の支払い能力（貯蓄）を遥かに超える。人生が破綻するレベルであり、貯蓄での対応は不可能。'},
    {'Id': 'risk-a-3', 'Title': '3. 心疾患・脳血管疾患', 'Chart Label': '心臓/脳血管疾患', 'Cost Estimate': 10000000,
     'Cost': '治療費（手術・入院）やリハビリで数百万円の自己負担。後遺症が残った場合、収入減や介護費用が発生し、総損害は1,000万円超となる。',
     'Frequency': '心疾患は死亡原因の第2位、脳血管疾患は要介護原因の第1位。再発リスクが高く、長期的なリスク。',
     'Evidence': '厚生労働省「人口動態統計」（令和4年）、生命保険文化センター「生活保障に関する調査」',
     'Rationale': '重篤な疾病の中でも、特に費用が高額かつ長期化し、生存後の生活レベルを大きく下げるリスク。現役世代での発症は収入の途絶に直結する。'},
    {'Id': 'risk-a-4', 'Title': '4. ステージの進んだがんの治療', 'Chart Label': 'がん治療', 'Cost Estimate': 3000000,
     'Cost': '高額療養費制度適用後も、先進医療（例：陽子線治療 約260万円）、差額ベッド代、通院費、未承認薬などで数百万円の自己負担＋収入減。',
     'Frequency': '生涯罹患率：2人に1人。40代から増加。治療が長期化する（数年単位）リスク。',
     'Evidence': '国立がん研究センター「がん統計」、厚生労働省「医療給付実態調査」',
     'Rationale': '治療の長期化による「治療費の継続的負担」と「就労不能による収入減」のダブルパンチ。特に先進医療や自由診療を選択する場合、貯蓄を一気に使い果たす可能性がある。'},
    {'Id': 'risk-a-5', 'Title': '5. 長期の入院（30日超）', 'Chart Label': '長期入院', 'Cost Estimate': 1000000,
     'Cost': '高額療養費制度適用後も、差額ベッド代（全国平均約6,500円/日）や雑費、収入減が累積。都心部や大規模病院では差額ベッド代が15,000円〜30,000円超/日になるケースがあり、長期化（3ヶ月等）で自己負担額は100万円〜300万円超になる。',
     'Frequency': '平均在院日数は全体で32.3日だが、精神障害や特定の難病では数ヶ月〜数年に及ぶことも。全体としては発生頻度は低いが、長期化リスクは無視できない。',
     'Evidence': '生命保険文化センター「生活保障に関する調査」（令和4年度）、厚生労働省「患者調査」（令和2年）',
     'Rationale': '短期入院（Bゾーン）と異なり、入院が長期化すると、公的保険の効かない差額ベッド代の地域差がそのまま自己負担額に大きく影響し、貯蓄を圧迫する。'},
    {'Id': 'risk-a-6', 'Title': '6. パートナーの早期死亡', 'Chart Label': 'パートナー死亡', 'Cost Estimate': 20000000,
     'Cost': '死亡保険金の平均額は約2,000万円（必要額は世帯構成による）。遺族の生活費、教育費、住居費など。',
     'Frequency': '例：40歳男性の年間死亡率は0.098%（1,000人に約1人）。',
     'Evidence': '生命保険文化センター「生命保険に関する全国実態調査」（2021年度）、厚生労働省「令和5年簡易生命表」',
     'Rationale': '遺された家族の長期的な生活基盤（特に子供の教育費や住宅ローン）を根底から揺るがすリスク。必要な保障額が数千万円単位となり、貯蓄でのカバーは困難。'},
    {'Id': 'risk-a-7', 'Title': '7. 介護費用（将来的に）', 'Chart Label': '介護費用(将来)', 'Cost Estimate': 5800000,
     'Cost': '一時的費用（住宅改修等）平均74万円。月額費用平均8.3万円。平均介護期間61.1ヶ月（約5年1ヶ月）。総額平均 約580万円。',
     'Frequency': '85歳以上では約60%が要介護（要支援）認定。介護期間は10年以上に及ぶケースも約18%。',
     'Evidence': '生命保険文化センター「生命保険に関する調査」（2021年度）、厚生労働省「介護給付費等実態統計」',
     'Rationale': '平均でも約600万円、長期化すれば1,000万円を超える費用が必要。公的介護保険（1〜3割負担）があっても、特に施設介護や手厚い在宅サービスを選ぶと自己負担は重くなる。'},
    {'Id': 'risk-a-8', 'Title': '8. 老後資金の不足', 'Chart Label': '老後資金 (不足額)', 'Cost Estimate': 25000000,
     'Cost': '約2,000万〜3,000万円超 (不足額)。平均的な老後生活（30年間）で、公的年金に加えて必要となる貯蓄・運用額。',
     'Frequency': 'ほぼ100% (公的年金のみで満足な生活を送れない可能性)。長生きリスクとセット。',
     'Evidence': '金融庁「老後2,000万円問題」報告書（2019年）、総務省「家計調査報告」（2023年）',
     'Rationale': '公的年金は最低限の生活費を賄う水準にあり、ゆとりある老後や医療・介護予備費を考慮すると、自助努力による準備が必須となる。保険ではなく計画的な積立・運用（自助）が必要なリスク。'},
    {'Id': 'risk-a-9', 'Title': '9. 親の介護（子の経済的負担）', 'Chart Label': '親の介護(子負担)', 'Cost Estimate': 1000000,
     'Cost': '月々の費用負担: 平均1.5万円。一時費用: 平均50万円。親が施設に入居した場合、施設費や医療費で子の負担がさらに増えるリスクがある。',
     'Frequency': '団塊の世代が75歳以上になることで、子の世代の介護リスクが急増中。子の介護期間は平均54.5ヶ月（約4年半）。',
     'Evidence': '公益財団法人 生命保険文化センター「生命保険に関する全国実態調査」（2021年度）',
     'Rationale': '親の資産状況によっては、現役の子世代が自分の家計から捻出する必要が生じる。経済的な負担だけでなく、介護離職という形で収入が途絶える時間的リスクも伴う。'},
]

ZONE_B_RISKS = [
    {'Id': 'risk-b-1', 'Title': '1. 自動車の軽微な物損事故', 'Chart Label': '自動車の軽微な物損', 'Cost Estimate': 80000,
     'Cost': 'バンパーの擦り傷修理、ドアミラー交換など。数万円〜10数万円。',
     'Frequency': '比較的高い（運転頻度による）。',
     'Evidence': '損害保険会社（車両保険の利用データなど）',
     'Rationale': '費用が少額。保険（車両保険）を使うと等級が下がり翌年度以降の保険料が上がる（数万円）ため、少額の修理は貯蓄（自己負担）で対応した方が合理的な場合が多い。'},
    {'Id': 'risk-b-2', 'Title': '2. 旅行のキャンセル費用', 'Chart Label': '旅行キャンセル', 'Cost Estimate': 50000,
     'Cost': '旅行代金の数%〜100%。数万円程度が一般的。',
     'Frequency': '個人の事情（体調不良、急用）による（比較的高い）。',
     'Evidence': '各旅行会社の約款',
     'Rationale': '費用が限定的であり、予測可能な損失範囲。趣味・娯楽の範囲であり、生活基盤を揺るがすリスクではないため、貯蓄で備えるのが基本。'},
    {'Id': 'risk-b-3', 'Title': '3. 上皮内がん（ステージ0）', 'Chart Label': '上皮内がん (手術)', 'Cost Estimate': 150000,
     'Cost': '日帰り手術や短期入院（数日）が中心。内視鏡手術などで10〜20万円程度（高額療養費制度適用）。',
     'Frequency': 'がん全体の一部。早期発見により割合が増加。',
     'Evidence': '国立がん研究センター、医療機関の治療実績',
     'Rationale': '「がん」と名はつくが、ステージの進んだがん（Aゾーン）とは別物。治療期間が短く、費用も限定的。その後の就労への影響も少ない。'},
    {'Id': 'risk-b-4', 'Title': '4. 短期の入院（1ヶ月未満）', 'Chart Label': '短期入院 (平均)', 'Cost Estimate': 109000,
     'Cost': '入院時の自己負担費用は平均19.8万円。大部屋（差額ベッド代なし）の場合、1日あたり平均8,143円。平均入院日数（13.4日）で総額約10.9万円に抑えられる。',
     'Frequency': '平均入院日数は13.4日。ただし、差額ベッド代は地域や病院のグレードにより大きく変動する。',
     'Evidence': '生命保険文化センター「生活保障に関する調査」（令和4年度）、厚生労働省「患者調査」',
     'Rationale': '公的保険（高額療養費制度）が非常に強力。差額ベッド代を避ける選択をすれば、費用は平均10万円台前半に抑えられ、貯蓄で十分対応可能。'},
    {'Id': 'risk-b-5', 'Title': '5. 骨折', 'Chart Label': '骨折 (通院)', 'Cost Estimate': 50000,
     'Cost': '通院治療（3割負担）で数万円程度。手術・短期入院を伴っても10〜20万円程度（高額療養費制度適用）。',
     'Frequency': '比較的高め（特に高齢者やスポーツ時）。',
     'Evidence': '医療機関の一般的な治療費',
     'Rationale': '費用が比較的少額で、生命や長期の就労に直結するリスクは低い。貯蓄で対応可能な範囲。'},
    {'Id': 'risk-b-6', 'Title': '6. 風邪やインフルエンザ', 'Chart Label': '風邪・インフル', 'Cost Estimate': 8000,
     'Cost': '診療費・薬剤費で数千円〜1万円程度（公的保険3割負担）。',
     'Frequency': '非常に高い（季節性、誰でも罹患する）。',
     'Evidence': '厚生労働省（インフルエンザ流行マップなど）、一般的な医療費',
     'Rationale': '費用が少額で、発生頻度が高すぎる。保険で備える（少額の保険金を請求する）コスト（保険料）の方が高くつく。貯蓄で対応すべき典型。'},
]

ZONE_CHART_MAX = {'A': 50000000, 'B': 500000}

# --- Death / disability probability ---

PROBABILITY_AGES = [20, 30, 40, 50, 60, 65]
PROBABILITY_CUMULATIVE = [0.1, 1.2, 3.5, 7.8, 11.5, 13.5]
PROBABILITY_BREAKDOWN = {'死亡': 42, '障害・就業不能': 58}

PROBABILITY_CAUSES = [
    {'Age Group': '20代-30代', '精神・神経系': 40, '事故・外傷': 30, 'がん・循環器・他': 30},
    {'Age Group': '40代', '精神・神経系': 25, '事故・外傷': 15, 'がん・循環器・他': 60},
    {'Age Group': '50代-60代', '精神・神経系': 10, '事故・外傷': 5, 'がん・循環器・他': 85},
]

PROBABILITY_WATERFALL = [
    {'Label': '① 死亡', 'Value': 6.5},
    {'Label': '② 重度障害', 'Value': 4.0},
    {'Label': '③ 要介護・長期療養', 'Value': 3.0},
]
PROBABILITY_TOTAL_LABEL = '合計: 経済的不能確率'

PROBABILITY_SUMMARY = (
    "20歳から65歳までの45年間において、死亡、または重度の障害により「経済的な活動ができなくなる」確率は、"
    "統計的に約13.5%（およそ7人に1人）と推計されます。"
)

PROBABILITY_EVIDENCE_DATA = [
    {'Risk': '死亡リスク（20〜65歳）', '男性': '9.30%', '女性': '4.77%', 'Source': '厚生労働省 令和5年簡易生命表'},
    {'Risk': '死亡リスク（35〜65歳）', '男性': '8.59%', '女性': '4.29%', 'Source': '厚生労働省 令和5年簡易生命表'},
    {'Risk': '就業不能リスク（長期療養、35歳起点）', '男性': '約13%', '女性': '約13%', 'Source': '協会けんぽ 現金給付受給者状況調査'},
]

# --- Risk board ---

BOARD_HELP_TEXT = """
リスクカードを「事故の頻度」（上: よくある / 下: まれに）と「損害額」（左: 困らない / 右: 困る）の
マトリクス上に配置して、保険で備えるリスクと貯蓄で備えるリスクを整理します。
同じセッションIDを共有すると、複数人で同時に編集できます。
"""
