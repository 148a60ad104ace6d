"""
参数解析器 for modelSelector v1.0.

支持 compare 和 pca 两种模式。
"""

import argparse
from typing import List, Optional, Sequence


def str2bool(v):
    """将字符串转换为布尔值。"""
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')


def comma_separated_items(value: str) -> List[str]:
    """解析逗号分隔的字符串为列表。"""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def positive_int(value: str) -> int:
    """解析正整数参数。"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Integer expected, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"Positive integer expected, got {number}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """创建和配置CLI解析器，支持compare和pca子命令。"""
    parser = argparse.ArgumentParser(
        prog="model-selector",
        description="modelSelector v1.0 - 逻辑回归模型比较（交叉验证准确率 + AICc）",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    def add_common_options(p):
        """添加通用参数选项。"""
        p.add_argument('--data_file', type=str, required=True,
                       help="CSV数据文件路径")
        p.add_argument('--output', type=str, required=False, default=None,
                       help="结果输出目录 (未指定时使用配置中的目录)")
        p.add_argument('--config', type=str, required=False, default=None,
                       help="YAML配置文件路径 (可选，覆盖默认值)")
        p.add_argument('--verbose', type=str2bool, required=False, default=None,
                       help="输出DEBUG日志并在出错时打印完整堆栈")

    # compare子命令
    compare_p = subparsers.add_parser('compare', help='交叉验证与AICc比较候选模型并选择最终模型')
    add_common_options(compare_p)
    compare_p.add_argument('--folds', type=positive_int, required=False, default=None,
                           help="交叉验证折数 (默认: 10)")
    compare_p.add_argument('--seed', type=int, required=False, default=None,
                           help="折划分随机种子 (默认: 244)")
    compare_p.add_argument('--cpu', type=positive_int, required=False, default=None,
                           help="并行评估的CPU核心数 (默认: 1)")
    compare_p.add_argument('--accuracy_tolerance', type=float, required=False, default=None,
                           help="AICc最优模型可落后于最高CV准确率的容差 (默认: 0.005)")
    compare_p.add_argument('--strict', type=str2bool, required=False, default=None,
                           help="AICc与CV准确率不一致时报错退出")
    compare_p.add_argument('--plots', type=str2bool, required=False, default=True,
                           help="生成图表")

    # pca子命令
    pca_p = subparsers.add_parser('pca', help='食物营养成分主成分分析')
    add_common_options(pca_p)
    pca_p.add_argument('--food_groups', type=comma_separated_items, required=False, default=None,
                       help="仅保留的食物类别 (逗号分隔)")
    pca_p.add_argument('--columns', type=comma_separated_items, required=False, default=None,
                       help="参与PCA的营养成分列 (逗号分隔)")
    pca_p.add_argument('--n_components', type=positive_int, required=False, default=None,
                       help="保留的主成分个数 (默认: 全部)")
    pca_p.add_argument('--scale', type=str2bool, required=False, default=None,
                       help="PCA前是否标准化各列 (默认: True)")
    pca_p.add_argument('--plots', type=str2bool, required=False, default=True,
                       help="生成图表")

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """解析命令行参数。配置文件在流水线中通过 ConfigManager 合并。"""
    parser = create_argument_parser()
    return parser.parse_args(argv)
