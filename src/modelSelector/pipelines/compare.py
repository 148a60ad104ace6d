#!/usr/bin/env python3
"""
模型比较流水线 for modelSelector v1.0.

三个阶段：
1. k 折交叉验证（所有候选模型共用同一折划分）
2. AICc 排名（全量数据拟合）
3. 最终模型选择与全量数据重新拟合

结果写入输出目录：CSV 表格、HTML 报告、图表、最终模型 (joblib)。
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from modelSelector.core.cross_validation import CrossValidator
from modelSelector.core.ranker import rank, ranking_table
from modelSelector.core.final_model_selector import FinalModelSelector
from modelSelector.data.loader import DataLoader
from modelSelector.data.validator import DataValidator
from modelSelector.evaluation.metrics import MetricsCalculator
from modelSelector.evaluation.reporter import ResultsReporter
from modelSelector.evaluation.visualizer import ResultsVisualizer
from modelSelector.config.default_config import DEFAULT_CONFIG
from modelSelector.utils.config import Config, ConfigManager
from modelSelector.utils.helpers import ensure_directory, save_object
from modelSelector.utils.logger import get_logger, setup_logging


def build_config(args: argparse.Namespace) -> Config:
    """默认值 < 配置文件 < 命令行参数。"""
    manager = ConfigManager()
    if getattr(args, 'config', None):
        manager.load_from_file(args.config)
    manager.update_config(
        data_file=args.data_file,
        output_dir=args.output,
        verbose=getattr(args, 'verbose', None),
        folds=getattr(args, 'folds', None),
        seed=getattr(args, 'seed', None),
        n_jobs=getattr(args, 'cpu', None),
        accuracy_tolerance=getattr(args, 'accuracy_tolerance', None),
        strict=getattr(args, 'strict', None),
    )
    return manager.get_config()


def handle_compare(args: argparse.Namespace) -> Dict[str, Any]:
    """处理compare命令：加载数据，交叉验证，AICc排名，选择并保存最终模型。"""
    config = build_config(args)
    output_dir = ensure_directory(config.output_dir)

    file_handler = setup_logging(
        level=logging.DEBUG if config.verbose else logging.INFO,
        log_file=output_dir / DEFAULT_CONFIG["logging"]["file"],
        log_format=DEFAULT_CONFIG["logging"]["format"],
    )
    try:
        return run_compare(config, output_dir, plots=getattr(args, 'plots', True))
    finally:
        if file_handler is not None:
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()


def run_compare(config: Config, output_dir: Path, plots: bool = True) -> Dict[str, Any]:
    logger = get_logger("ComparePipeline")
    logger.info("开始模型比较流水线...")
    logger.info(f"输出目录: {output_dir}")

    if not config.data_file:
        raise ValueError("No data file given (use --data_file or 'data_file' in the config)")

    # 1. 加载和验证数据
    specs = config.build_specifications()
    dataset = DataLoader().load_dataset(
        config.data_file,
        response=config.response,
        predictors=config.required_columns(),
        positive_class=config.positive_class,
        reference_class=config.reference_class,
        response_mapping=config.response_mapping,
    )
    DataValidator().validate(dataset, specs)
    for spec in specs:
        logger.info(f"{spec.label}: {spec.formula()}")

    # 2. 交叉验证
    logger.info("=" * 60)
    logger.info("第一阶段：交叉验证")
    logger.info("=" * 60)
    cv_result = CrossValidator(config.cv_config()).evaluate(dataset, specs)
    cv_accuracies = cv_result.mean_accuracy()

    # 3. AICc排名
    logger.info("=" * 60)
    logger.info("第二阶段：AICc排名")
    logger.info("=" * 60)
    ranked = rank(dataset, specs)

    # 4. 最终模型
    logger.info("=" * 60)
    logger.info("第三阶段：最终模型")
    logger.info("=" * 60)
    selector = FinalModelSelector(accuracy_tolerance=config.accuracy_tolerance, strict=config.strict)
    final = selector.select_and_finalize(dataset, ranked, cv_accuracies)

    calculator = MetricsCalculator()
    metrics = calculator.calculate_metrics(
        final.predictions['actual'], final.predictions['predicted'], dataset.positive_class
    )
    coefficients = final.classifier.coefficient_table().to_frame('estimate')
    coefficients.index.name = 'term'

    tables = {
        'cv_fold_accuracy': cv_result.to_frame(),
        'cv_summary': cv_result.summary(),
        'aicc_ranking': ranking_table(ranked),
        'final_coefficients': coefficients,
        'final_predictions': final.predictions,
        'classification_summary': final.summary,
        'confusion_matrix': calculator.confusion_matrix(
            final.predictions['actual'], final.predictions['predicted'], dataset.classes
        ),
    }

    reporter = ResultsReporter()
    reporter.save_tables(tables, output_dir)
    save_object(final.classifier, output_dir / "final_model.joblib")

    summary = {
        'n_observations': len(dataset),
        'folds': config.folds,
        'seed': config.seed,
        'final_model': final.spec.label,
        'formula': final.spec.formula(),
        'cv_accuracy': final.cv_accuracy,
        'training_accuracy': final.accuracy,
    }
    notes = [f"Model selection conflict: {final.conflict.describe()}"] if final.conflict else []
    reporter.generate_report(
        {
            'title': 'modelSelector Model Comparison',
            'summary': summary,
            'notes': notes,
            'sections': {
                'AICc Ranking': tables['aicc_ranking'],
                'Cross-Validated Accuracy': tables['cv_summary'],
                'Final Model Coefficients': tables['final_coefficients'],
                'Classification Summary': tables['classification_summary'],
            },
        },
        output_dir / "report.html",
    )
    reporter.save_results_json(
        {
            'summary': summary,
            'metrics': metrics,
            'cv_accuracy': cv_accuracies,
            'conflict': final.conflict.describe() if final.conflict else None,
        },
        output_dir / "results.json",
    )

    if plots:
        visualizer = ResultsVisualizer()
        visualizer.plot_cv_accuracy(tables['cv_fold_accuracy'], output_dir / "figures" / "cv_accuracy.png")
        visualizer.plot_classification_summary(final.summary, output_dir / "figures" / "classification_summary.png")

    logger.info(f"最终模型: {final.spec.label} ({final.spec.formula()})")
    logger.info(f"CV准确率: {final.cv_accuracy:.4f}, 全量数据准确率: {final.accuracy:.4f}")

    return {
        'dataset': dataset,
        'cv_result': cv_result,
        'ranking': ranked,
        'final_model': final,
        'metrics': metrics,
        'output_dir': output_dir,
    }
